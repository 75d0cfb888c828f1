"""
Automated matches against the adaptive opponent, used to measure the
difficulty curve.
"""
import random
from dataclasses import dataclass
from typing import Optional

from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.state import BatBowl, Difficulty, MatchResult, Phase, TossChoice

# Hand cricket has no ball limit; a match that runs this long is abandoned.
MAX_BALLS = 2000


@dataclass
class HabitualBot:
    """Stands in for the human: plays a favourite number with probability `habit`"""
    rng: random.Random
    favourite: int = 4
    habit: float = 0.5

    def move(self) -> int:
        if self.rng.random() < self.habit:
            return self.favourite
        return self.rng.randint(1, 6)

    def toss(self) -> TossChoice:
        return self.rng.choice(list(TossChoice))

    def bat_or_bowl(self) -> BatBowl:
        return self.rng.choice(list(BatBowl))


def simulate_match(
    difficulty: Difficulty,
    bot: HabitualBot,
    engine: Optional[MatchEngine] = None,
) -> Optional[MatchResult]:
    """Play one full match. Returns None if it hit MAX_BALLS."""
    engine = engine or MatchEngine()
    engine.reset()
    engine.select_difficulty(difficulty)

    while engine.phase == Phase.TOSS:
        step = engine.resolve_toss(bot.toss())
        if step.snapshot.awaiting_bat_bowl:
            engine.choose_bat_or_bowl(bot.bat_or_bowl())

    for _ in range(MAX_BALLS):
        engine.play_ball(bot.move())
        engine.complete_resolution()
        if engine.phase == Phase.GAME_OVER:
            return engine.snapshot().result
    return None
