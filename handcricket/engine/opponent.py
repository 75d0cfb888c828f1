"""
Adaptive opponent - predicts the human's habitual number from recent inputs
"""
import random
from collections import Counter
from typing import Optional, Sequence

from handcricket.engine.state import Role

MOVES = [1, 2, 3, 4, 5, 6]
MIN_HISTORY = 3
AVOID_MODE_PROBABILITY = 0.8


def most_frequent_move(history: Sequence[int]) -> int:
    """Mode of the history; ties go to the lowest value."""
    counts = Counter(history)
    best_move = MOVES[0]
    best_count = 0
    for move in MOVES:
        if counts[move] > best_count:
            best_count = counts[move]
            best_move = move
    return best_move


class AdaptiveOpponent:
    """
    Computer player.

    With probability `difficulty_weight` (and once at least three inputs are
    known) it reads the human's most frequent number:
    - bowling: plays that number, hoping to dismiss the batter
    - batting: usually avoids it, since the human bowler tends to repeat it
    Otherwise it plays uniformly at random.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def random_move(self) -> int:
        return self.rng.randint(1, 6)

    def next_move(self, history: Sequence[int], difficulty_weight: float, role: Role) -> int:
        if self.rng.random() > difficulty_weight or len(history) < MIN_HISTORY:
            return self.random_move()

        mode = most_frequent_move(history)

        if role == Role.BOWLING:
            return mode

        choices = list(MOVES)
        if self.rng.random() < AVOID_MODE_PROBABILITY:
            choices = [c for c in choices if c != mode]
        return self.rng.choice(choices)
