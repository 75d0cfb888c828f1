"""
Interactive match API - the control surface of the live match
"""
import threading
from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from handcricket.database import SessionLocal
from handcricket.engine.achievements import CATALOG_BY_ID
from handcricket.engine.errors import MatchError, ResolutionPending
from handcricket.engine.game_session import GameSession, SessionStep
from handcricket.engine.state import Dismissal, RunsScored
from handcricket.engine.stats_store import StatsStore
from handcricket.api.schemas import (
    AchievementResponse, BallRequest, BallResultResponse, BatBowlRequest,
    CommentaryResponse, DifficultyRequest, MatchStateResponse, TossRequest,
    TossResultResponse,
)

router = APIRouter(prefix="/game", tags=["Match"])

# One live match per process
_game: Optional[GameSession] = None
_game_lock = threading.Lock()


def get_game() -> GameSession:
    """FastAPI dependency - the process-wide game session"""
    global _game
    if _game is None:
        with _game_lock:
            if _game is None:
                _game = GameSession(StatsStore(SessionLocal))
    return _game


def _apply(action, *args) -> SessionStep:
    """Run a control call, turning rejections into HTTP errors"""
    try:
        return action(*args)
    except ResolutionPending as e:
        raise HTTPException(status_code=409, detail=str(e))
    except MatchError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _achievements(ids: list) -> list[AchievementResponse]:
    return [
        AchievementResponse(
            id=aid,
            title=CATALOG_BY_ID[aid].title,
            description=CATALOG_BY_ID[aid].description,
            unlocked=True,
        )
        for aid in ids
    ]


@router.get("/state", response_model=MatchStateResponse)
def get_state(game: GameSession = Depends(get_game)):
    return MatchStateResponse.from_snapshot(game.snapshot())


@router.post("/difficulty", response_model=MatchStateResponse)
def select_difficulty(request: DifficultyRequest, game: GameSession = Depends(get_game)):
    """Pick easy/medium/hard and move on to the toss"""
    step = _apply(game.select_difficulty, request.level)
    return MatchStateResponse.from_snapshot(step.snapshot)


@router.post("/toss", response_model=TossResultResponse)
def do_toss(request: TossRequest, game: GameSession = Depends(get_game)):
    """Play rock/paper/scissors against the computer. Ties must be tossed again."""
    step = _apply(game.resolve_toss, request.choice)
    toss = step.toss
    return TossResultResponse(
        player_choice=toss.player_choice.value,
        computer_choice=toss.computer_choice.value,
        is_tie=toss.is_tie,
        winner=toss.winner.value if toss.winner else None,
        computer_decision=toss.computer_decision.value if toss.computer_decision else None,
        match_state=MatchStateResponse.from_snapshot(step.snapshot),
    )


@router.post("/choose", response_model=MatchStateResponse)
def choose_bat_or_bowl(request: BatBowlRequest, game: GameSession = Depends(get_game)):
    """Toss winner elects to bat or bowl"""
    step = _apply(game.choose_bat_or_bowl, request.choice)
    return MatchStateResponse.from_snapshot(step.snapshot)


@router.post("/ball", response_model=BallResultResponse)
def play_ball(request: BallRequest, game: GameSession = Depends(get_game)):
    """
    Reveal a number. The next ball is rejected (409) until the client calls
    /game/resolve after showing the result.
    """
    step = _apply(game.play_ball, request.value)
    runs = next((e.runs for e in step.events if isinstance(e, RunsScored)), 0)
    return BallResultResponse(
        player_move=step.snapshot.last_player_move,
        computer_move=step.snapshot.last_computer_move,
        is_out=any(isinstance(e, Dismissal) for e in step.events),
        runs=runs,
        unlocked_achievements=_achievements(step.unlocked),
        match_state=MatchStateResponse.from_snapshot(step.snapshot),
    )


@router.post("/resolve", response_model=MatchStateResponse)
def complete_resolution(game: GameSession = Depends(get_game)):
    """Release the processing lock once the reveal has been shown"""
    step = _apply(game.complete_resolution)
    return MatchStateResponse.from_snapshot(step.snapshot)


@router.post("/reset", response_model=MatchStateResponse)
def reset_game(game: GameSession = Depends(get_game)):
    step = _apply(game.reset)
    return MatchStateResponse.from_snapshot(step.snapshot)


@router.post("/commentary", response_model=CommentaryResponse)
def get_commentary(game: GameSession = Depends(get_game)):
    """Short commentary on the finished match"""
    commentary = _apply(game.commentate)
    return CommentaryResponse(commentary=commentary)
