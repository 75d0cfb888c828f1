from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr

THEMES = ("light", "dark")


class StoredStats(BaseModel):
    """Shape of the persisted "stats" JSON object"""
    model_config = ConfigDict(extra="ignore")

    wins: StrictInt = Field(0, ge=0)
    losses: StrictInt = Field(0, ge=0)
    draws: StrictInt = Field(0, ge=0)
    totalRuns: StrictInt = Field(0, ge=0)
    highestScore: StrictInt = Field(0, ge=0)
    wickets: StrictInt = Field(0, ge=0)
    unlockedAchievementIds: List[StrictStr] = Field(
        default_factory=list,
        validation_alias=AliasChoices("unlockedAchievementIds", "unlockedAchievements"),
    )


class StatsValidator:
    @staticmethod
    def parse_stats(raw: str) -> dict:
        """
        Parse a stored stats payload.

        Rules:
        1. Must be a JSON object
        2. Counts are non-negative integers (missing counts default to 0)
        3. Achievement ids are a list of strings

        Raises ValueError (pydantic.ValidationError) when any rule fails.
        """
        payload = StoredStats.model_validate_json(raw)
        return payload.model_dump()

    @staticmethod
    def parse_theme(raw: str) -> str:
        if raw not in THEMES:
            raise ValueError(f"Unknown theme {raw!r}")
        return raw
