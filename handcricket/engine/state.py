"""
Match state types - phases, sides, choices, events and the observable snapshot
"""
import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union


class Phase(enum.Enum):
    DIFFICULTY_SELECT = "difficulty_select"
    TOSS = "toss"
    BATTING = "batting"
    INNINGS_BREAK = "innings_break"
    GAME_OVER = "game_over"


class Side(enum.Enum):
    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def other(self) -> "Side":
        return Side.COMPUTER if self is Side.PLAYER else Side.PLAYER


class Role(enum.Enum):
    BATTING = "batting"
    BOWLING = "bowling"


class Difficulty(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def weight(self) -> float:
        """Probability that the opponent plays its predictive strategy"""
        return DIFFICULTY_WEIGHTS[self]


DIFFICULTY_WEIGHTS = {
    Difficulty.EASY: 0.35,
    Difficulty.MEDIUM: 0.70,
    Difficulty.HARD: 1.0,
}


class TossChoice(enum.Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class BatBowl(enum.Enum):
    BAT = "bat"
    BOWL = "bowl"


class MatchResult(enum.Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


RESULT_TEXT = {
    MatchResult.WIN: ("You Won! 🎉", "A great performance!"),
    MatchResult.LOSS: ("Computer Won 😞", "Better luck next time!"),
    MatchResult.DRAW: ("Match Drawn 🤝", "Scores are level!"),
}

HISTORY_LIMIT = 10
MILESTONES = (50, 100)


# Events emitted by MatchEngine transitions

@dataclass(frozen=True)
class RunsScored:
    side: Side
    runs: int
    total: int


@dataclass(frozen=True)
class Dismissal:
    side: Side
    score: int


@dataclass(frozen=True)
class MilestoneReached:
    """Human batter crossed 50 or 100 in the current innings"""
    score: int
    milestone: int


@dataclass(frozen=True)
class InningsSwitched:
    target: int
    batting_side: Side


@dataclass(frozen=True)
class MatchEnded:
    result: MatchResult
    player_score: int
    computer_score: int
    target: int


MatchEvent = Union[RunsScored, Dismissal, MilestoneReached, InningsSwitched, MatchEnded]


@dataclass(frozen=True)
class TossOutcome:
    """Result of one rock/paper/scissors toss. winner is None on a tie."""
    player_choice: TossChoice
    computer_choice: TossChoice
    winner: Optional[Side] = None
    computer_decision: Optional[BatBowl] = None

    @property
    def is_tie(self) -> bool:
        return self.winner is None


@dataclass(frozen=True)
class LogEntry:
    icon: str
    text: str


@dataclass
class MatchState:
    """Mutable state of the one live match"""
    phase: Phase = Phase.DIFFICULTY_SELECT
    difficulty: Optional[Difficulty] = None
    player_score: int = 0
    computer_score: int = 0
    target: int = 0
    batting_side: Optional[Side] = None
    innings_index: int = 0
    ball_history: list = field(default_factory=list)
    processing: bool = False
    awaiting_bat_bowl: bool = False
    last_player_move: Optional[int] = None
    last_computer_move: Optional[int] = None
    message: str = ""
    result: Optional[MatchResult] = None
    log: list = field(default_factory=list)  # newest first

    def score_of(self, side: Side) -> int:
        return self.player_score if side is Side.PLAYER else self.computer_score


@dataclass(frozen=True)
class MatchSnapshot:
    """Observable view of the match returned by every control call"""
    phase: Phase
    player_score: int
    computer_score: int
    target: int
    last_player_move: Optional[int]
    last_computer_move: Optional[int]
    message: str
    batting_side: Optional[Side] = None
    innings: int = 0
    difficulty: Optional[Difficulty] = None
    awaiting_bat_bowl: bool = False
    ready_for_next_ball: bool = False
    result: Optional[MatchResult] = None
    log: tuple = ()

    @property
    def result_title(self) -> Optional[str]:
        return RESULT_TEXT[self.result][0] if self.result else None

    @property
    def result_message(self) -> Optional[str]:
        return RESULT_TEXT[self.result][1] if self.result else None


@dataclass
class StepResult:
    snapshot: MatchSnapshot
    events: List[MatchEvent] = field(default_factory=list)
    toss: Optional[TossOutcome] = None
