"""
Career stats ledger kept across matches, with JSON-friendly serialization.
"""
from dataclasses import dataclass, field
from typing import Set


@dataclass
class CareerStats:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_runs: int = 0
    highest_score: int = 0
    wickets: int = 0  # taken by the human while bowling
    unlocked_achievement_ids: Set[str] = field(default_factory=set)

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses + self.draws

    def to_dict(self) -> dict:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "totalRuns": self.total_runs,
            "highestScore": self.highest_score,
            "wickets": self.wickets,
            "unlockedAchievementIds": sorted(self.unlocked_achievement_ids),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "CareerStats":
        return cls(
            wins=d.get("wins", 0),
            losses=d.get("losses", 0),
            draws=d.get("draws", 0),
            total_runs=d.get("totalRuns", 0),
            highest_score=d.get("highestScore", 0),
            wickets=d.get("wickets", 0),
            unlocked_achievement_ids=set(d.get("unlockedAchievementIds", [])),
        )
