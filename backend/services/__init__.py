from .matchmaking import MatchmakingQueue
from .registry import SessionRegistry
from .room import GameError, GameRoom

__all__ = ["GameError", "GameRoom", "MatchmakingQueue", "SessionRegistry"]
