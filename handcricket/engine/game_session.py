"""
Game Session - wires the live match to career stats, achievements and storage
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from handcricket.engine.achievements import AchievementEngine, CATALOG_BY_ID
from handcricket.engine.commentary import CommentaryService, MatchSummary
from handcricket.engine.errors import InvalidPhase
from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.state import (
    Dismissal, MatchEnded, MatchResult, MatchSnapshot, Phase, RunsScored, Side,
    StepResult, TossOutcome,
)
from handcricket.engine.stats_store import StatsStore

logger = logging.getLogger(__name__)


@dataclass
class SessionStep:
    """A MatchEngine step plus the achievements it unlocked"""
    snapshot: MatchSnapshot
    events: list = field(default_factory=list)
    toss: Optional[TossOutcome] = None
    unlocked: list = field(default_factory=list)  # achievement ids, catalog order


class GameSession:
    """
    Process-wide orchestration around a single MatchEngine.

    Career stats are loaded once on construction. Match events are folded into
    the stats as they happen; stats are written after a match ends and after
    any achievement unlocks.
    """

    def __init__(
        self,
        store: StatsStore,
        engine: Optional[MatchEngine] = None,
        commentary: Optional[CommentaryService] = None,
    ):
        self.store = store
        self.engine = engine or MatchEngine()
        self.commentary = commentary or CommentaryService()
        self.stats = store.load_stats()
        self.achievements = AchievementEngine(self.stats.unlocked_achievement_ids)
        self.stats.unlocked_achievement_ids = self.achievements.unlocked_ids

    # --- Control surface ---

    def snapshot(self) -> MatchSnapshot:
        return self.engine.snapshot()

    def select_difficulty(self, level) -> SessionStep:
        return self._handle(self.engine.select_difficulty(level))

    def resolve_toss(self, choice) -> SessionStep:
        return self._handle(self.engine.resolve_toss(choice))

    def choose_bat_or_bowl(self, choice) -> SessionStep:
        return self._handle(self.engine.choose_bat_or_bowl(choice))

    def play_ball(self, value) -> SessionStep:
        return self._handle(self.engine.play_ball(value))

    def complete_resolution(self) -> SessionStep:
        return self._handle(self.engine.complete_resolution())

    def reset(self) -> SessionStep:
        return self._handle(self.engine.reset())

    def commentate(self) -> str:
        snapshot = self.engine.snapshot()
        if snapshot.phase != Phase.GAME_OVER:
            raise InvalidPhase("Commentary is available once the match is over")
        return self.commentary.commentate(MatchSummary.from_snapshot(snapshot))

    # --- Theme ---

    def get_theme(self) -> str:
        return self.store.load_theme()

    def set_theme(self, theme: str) -> str:
        self.store.save_theme(theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.get_theme() == "light" else "light")

    # --- Event handling ---

    def _handle(self, step: StepResult) -> SessionStep:
        unlocked = self.apply_events(step.events)
        return SessionStep(
            snapshot=step.snapshot,
            events=step.events,
            toss=step.toss,
            unlocked=[aid for aid in CATALOG_BY_ID if aid in unlocked],
        )

    def apply_events(self, events: list) -> set:
        """Fold match events into career stats. Returns newly unlocked ids."""
        stats = self.stats
        unlocked = set()
        match_over = False

        for event in events:
            if isinstance(event, RunsScored):
                if event.side is Side.PLAYER:
                    stats.total_runs += event.runs
                    stats.highest_score = max(stats.highest_score, event.total)
            elif isinstance(event, Dismissal):
                if event.side is Side.PLAYER:
                    stats.highest_score = max(stats.highest_score, event.score)
                    unlocked |= self._evaluate(event.score)
                else:
                    stats.wickets += 1
                    unlocked |= self._evaluate(0)
            elif isinstance(event, MatchEnded):
                if event.result is MatchResult.WIN:
                    stats.wins += 1
                elif event.result is MatchResult.LOSS:
                    stats.losses += 1
                else:
                    stats.draws += 1
                unlocked |= self._evaluate(event.player_score)
                match_over = True

        if unlocked or match_over:
            self.store.save_stats(stats)
        return unlocked

    def _evaluate(self, current_score: int) -> set:
        newly_unlocked = self.achievements.evaluate(self.stats, current_score)
        self.stats.unlocked_achievement_ids |= newly_unlocked
        return newly_unlocked
