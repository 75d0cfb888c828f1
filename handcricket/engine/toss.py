"""
Toss - rock/paper/scissors decides who chooses to bat or bowl
"""
import logging
import random
from typing import Optional

from handcricket.engine.state import BatBowl, Side, TossChoice, TossOutcome

logger = logging.getLogger(__name__)

TOSS_CHOICES = [TossChoice.ROCK, TossChoice.PAPER, TossChoice.SCISSORS]

# choice -> the choice it beats
BEATS = {
    TossChoice.ROCK: TossChoice.SCISSORS,
    TossChoice.PAPER: TossChoice.ROCK,
    TossChoice.SCISSORS: TossChoice.PAPER,
}


class TossResolver:
    """
    Resolves a single toss. A tie is returned to the caller, who re-prompts;
    there is no retry loop here.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def resolve_toss(self, player_choice: TossChoice) -> TossOutcome:
        computer_choice = self.rng.choice(TOSS_CHOICES)

        if player_choice == computer_choice:
            logger.debug("Toss tied on %s", player_choice.value)
            return TossOutcome(player_choice=player_choice, computer_choice=computer_choice)

        if BEATS[player_choice] == computer_choice:
            winner = Side.PLAYER
            decision = None  # human decides via choose_bat_or_bowl
        else:
            winner = Side.COMPUTER
            decision = BatBowl.BAT if self.rng.random() > 0.5 else BatBowl.BOWL

        logger.debug(
            "Toss: player %s vs computer %s, %s wins",
            player_choice.value, computer_choice.value, winner.value,
        )
        return TossOutcome(
            player_choice=player_choice,
            computer_choice=computer_choice,
            winner=winner,
            computer_decision=decision,
        )
