"""
Achievement Engine - unlocks a fixed catalog of achievements at most once each
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from handcricket.engine.career import CareerStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    condition: Callable[[CareerStats, int], bool]


@dataclass
class AchievementStatus:
    id: str
    title: str
    description: str
    unlocked: bool


CATALOG = (
    AchievementDefinition(
        "firstWin", "First Victory", "Win your first match.",
        lambda stats, score: stats.wins >= 1,
    ),
    AchievementDefinition(
        "tenWins", "Serial Winner", "Win 10 matches.",
        lambda stats, score: stats.wins >= 10,
    ),
    AchievementDefinition(
        "fiftyRuns", "Half-Century", "Score 50 in a single match.",
        lambda stats, score: score >= 50,
    ),
    AchievementDefinition(
        "hundredRuns", "Century Scorer", "Score 100 in a single match.",
        lambda stats, score: score >= 100,
    ),
    AchievementDefinition(
        "fiveWickets", "Five-Wicket Haul", "Take 5 wickets in your career.",
        lambda stats, score: stats.wickets >= 5,
    ),
)

CATALOG_BY_ID = {a.id: a for a in CATALOG}


class AchievementEngine:
    """
    Holds the unlocked flag for each catalog entry. Evaluation only flips
    flags; persisting the unlocked ids is the caller's job.
    """

    def __init__(self, unlocked_ids: Optional[Iterable[str]] = None):
        self._unlocked = {a.id: False for a in CATALOG}
        for achievement_id in unlocked_ids or ():
            if achievement_id in self._unlocked:
                self._unlocked[achievement_id] = True
            else:
                logger.warning("Ignoring unknown achievement id %r", achievement_id)

    def is_unlocked(self, achievement_id: str) -> bool:
        return self._unlocked[achievement_id]

    @property
    def unlocked_ids(self) -> set:
        return {aid for aid, unlocked in self._unlocked.items() if unlocked}

    def evaluate(self, stats: CareerStats, current_score: int = 0) -> set:
        """Unlock every locked achievement whose condition now holds.

        Returns the ids unlocked by this call (empty when nothing changed).
        """
        newly_unlocked = set()
        for achievement in CATALOG:
            if self._unlocked[achievement.id]:
                continue
            if achievement.condition(stats, current_score):
                self._unlocked[achievement.id] = True
                newly_unlocked.add(achievement.id)
                logger.info("Achievement unlocked: %s", achievement.title)
        return newly_unlocked

    def statuses(self) -> list[AchievementStatus]:
        return [
            AchievementStatus(a.id, a.title, a.description, self._unlocked[a.id])
            for a in CATALOG
        ]
