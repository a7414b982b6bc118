from .game import GAMES, Game, Move, Position
from .leaderboard_entry import LEADERBOARDS, LeaderboardEntry
from .user import USERS, User, UserProfile

__all__ = [
    "GAMES",
    "LEADERBOARDS",
    "USERS",
    "Game",
    "LeaderboardEntry",
    "Move",
    "Position",
    "User",
    "UserProfile",
]
