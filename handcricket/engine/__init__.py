from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.opponent import AdaptiveOpponent
from handcricket.engine.toss import TossResolver
from handcricket.engine.achievements import AchievementEngine
from handcricket.engine.game_session import GameSession

__all__ = ["MatchEngine", "AdaptiveOpponent", "TossResolver", "AchievementEngine", "GameSession"]
