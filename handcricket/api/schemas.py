"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel
from typing import Optional
from enum import Enum

from handcricket.engine.state import BatBowl, Difficulty, MatchSnapshot, TossChoice


# Enums
class ThemeEnum(str, Enum):
    LIGHT = "light"
    DARK = "dark"


# Requests
class DifficultyRequest(BaseModel):
    level: Difficulty


class TossRequest(BaseModel):
    choice: TossChoice


class BatBowlRequest(BaseModel):
    choice: BatBowl


class BallRequest(BaseModel):
    value: int  # 1-6, range checked by the engine


class ThemeRequest(BaseModel):
    theme: Optional[ThemeEnum] = None  # omitted -> toggle


# Responses
class LogEntryResponse(BaseModel):
    icon: str
    text: str

    class Config:
        from_attributes = True


class MatchStateResponse(BaseModel):
    phase: str
    player_score: int
    computer_score: int
    target: int
    last_player_move: Optional[int] = None
    last_computer_move: Optional[int] = None
    message: str

    batting_side: Optional[str] = None
    innings: int = 0
    difficulty: Optional[str] = None
    awaiting_bat_bowl: bool = False
    ready_for_next_ball: bool = False

    result: Optional[str] = None
    result_title: Optional[str] = None
    result_message: Optional[str] = None

    history: list[LogEntryResponse] = []

    @classmethod
    def from_snapshot(cls, snapshot: MatchSnapshot) -> "MatchStateResponse":
        return cls(
            phase=snapshot.phase.value,
            player_score=snapshot.player_score,
            computer_score=snapshot.computer_score,
            target=snapshot.target,
            last_player_move=snapshot.last_player_move,
            last_computer_move=snapshot.last_computer_move,
            message=snapshot.message,
            batting_side=snapshot.batting_side.value if snapshot.batting_side else None,
            innings=snapshot.innings,
            difficulty=snapshot.difficulty.value if snapshot.difficulty else None,
            awaiting_bat_bowl=snapshot.awaiting_bat_bowl,
            ready_for_next_ball=snapshot.ready_for_next_ball,
            result=snapshot.result.value if snapshot.result else None,
            result_title=snapshot.result_title,
            result_message=snapshot.result_message,
            history=[LogEntryResponse.model_validate(e) for e in snapshot.log],
        )


class TossResultResponse(BaseModel):
    player_choice: str
    computer_choice: str
    is_tie: bool
    winner: Optional[str] = None
    computer_decision: Optional[str] = None
    match_state: MatchStateResponse


class AchievementResponse(BaseModel):
    id: str
    title: str
    description: str
    unlocked: bool

    class Config:
        from_attributes = True


class BallResultResponse(BaseModel):
    player_move: int
    computer_move: int
    is_out: bool
    runs: int
    unlocked_achievements: list[AchievementResponse] = []
    match_state: MatchStateResponse


class StatsResponse(BaseModel):
    wins: int
    losses: int
    draws: int
    total_runs: int
    highest_score: int
    wickets: int
    matches_played: int
    unlocked_achievement_ids: list[str]


class ThemeResponse(BaseModel):
    theme: ThemeEnum


class CommentaryResponse(BaseModel):
    commentary: str
