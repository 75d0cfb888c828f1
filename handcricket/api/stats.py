"""
Career stats, achievements and settings API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from handcricket.engine.game_session import GameSession
from handcricket.api.game import get_game
from handcricket.api.schemas import (
    AchievementResponse, StatsResponse, ThemeRequest, ThemeResponse,
)

router = APIRouter(tags=["Career Stats"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(game: GameSession = Depends(get_game)):
    stats = game.stats
    return StatsResponse(
        wins=stats.wins,
        losses=stats.losses,
        draws=stats.draws,
        total_runs=stats.total_runs,
        highest_score=stats.highest_score,
        wickets=stats.wickets,
        matches_played=stats.matches_played,
        unlocked_achievement_ids=sorted(stats.unlocked_achievement_ids),
    )


@router.get("/stats/achievements", response_model=List[AchievementResponse])
def get_achievements(game: GameSession = Depends(get_game)):
    """All achievements with their unlocked flag"""
    return [AchievementResponse.model_validate(a) for a in game.achievements.statuses()]


@router.get("/settings/theme", response_model=ThemeResponse)
def get_theme(game: GameSession = Depends(get_game)):
    return ThemeResponse(theme=game.get_theme())


@router.put("/settings/theme", response_model=ThemeResponse)
def set_theme(request: ThemeRequest, game: GameSession = Depends(get_game)):
    """Store the theme, or toggle it when none is given"""
    if request.theme is None:
        theme = game.toggle_theme()
    else:
        theme = game.set_theme(request.theme.value)
    return ThemeResponse(theme=theme)
