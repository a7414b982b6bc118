from __future__ import annotations

from enum import Enum


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"
    ABANDONED = "abandoned"
