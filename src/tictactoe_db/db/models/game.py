from __future__ import annotations

from datetime import datetime

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, model_validator

from tictactoe_db.db.enums import GameStatus
from tictactoe_db.db.models._base import Document, utcnow
from tictactoe_db.db.specs import (
    ASCENDING,
    DESCENDING,
    CollectionSpec,
    IndexSpec,
    json_schema,
)

BOARD_SIZE = 3
MAX_MOVES = BOARD_SIZE * BOARD_SIZE

_CELL = {"bsonType": "int", "minimum": 0, "maximum": BOARD_SIZE - 1}

GAMES_VALIDATOR = json_schema(
    required=["players", "moves", "status", "created_at"],
    properties={
        "players": {
            "bsonType": "array",
            "description": "Array of two player IDs",
            "minItems": 2,
            "maxItems": 2,
            "items": {"bsonType": "objectId"},
        },
        "moves": {
            "bsonType": "array",
            "description": "Moves with player and position",
            "items": {
                "bsonType": "object",
                "required": ["player", "position", "timestamp"],
                "properties": {
                    "player": {"bsonType": "objectId", "description": "User ID"},
                    "position": {
                        "bsonType": "object",
                        "required": ["row", "col"],
                        "properties": {"row": dict(_CELL), "col": dict(_CELL)},
                    },
                    "timestamp": {"bsonType": "date"},
                },
            },
        },
        "status": {
            "bsonType": "string",
            "enum": [status.value for status in GameStatus],
            "description": "Game status",
        },
        "winner": {"bsonType": ["objectId", "null"], "description": "Winner ID or null"},
        "created_at": {"bsonType": "date"},
        "completed_at": {"bsonType": ["date", "null"]},
    },
)

GAMES = CollectionSpec(
    name="games",
    validator=GAMES_VALIDATOR,
    indexes=(
        IndexSpec(keys=(("players", ASCENDING),)),
        IndexSpec(keys=(("status", ASCENDING), ("created_at", DESCENDING))),
    ),
)


class Position(BaseModel):
    model_config = ConfigDict(extra="forbid")

    row: int = Field(ge=0, le=BOARD_SIZE - 1)
    col: int = Field(ge=0, le=BOARD_SIZE - 1)


class Move(Document):
    player: ObjectId
    position: Position
    timestamp: datetime = Field(default_factory=utcnow)


class Game(Document):
    players: list[ObjectId] = Field(min_length=2, max_length=2)
    moves: list[Move] = Field(default_factory=list, max_length=MAX_MOVES)
    status: GameStatus = GameStatus.ONGOING
    winner: ObjectId | None = None
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    @model_validator(mode="after")
    def check_references(self) -> Game:
        if self.players[0] == self.players[1]:
            raise ValueError("players must be two distinct users")
        if self.winner is not None and self.winner not in self.players:
            raise ValueError("winner must be one of players")
        for move in self.moves:
            if move.player not in self.players:
                raise ValueError(f"move by {move.player} who is not a player")
        return self

    @model_validator(mode="after")
    def check_status(self) -> Game:
        if self.status == GameStatus.ONGOING:
            if self.winner is not None or self.completed_at is not None:
                raise ValueError("ongoing game cannot have winner or completed_at")
            return self
        if self.completed_at is None:
            raise ValueError(f"{self.status} game requires completed_at")
        if self.status == GameStatus.WIN and self.winner is None:
            raise ValueError("won game requires winner")
        if self.status == GameStatus.DRAW and self.winner is not None:
            raise ValueError("drawn game cannot have a winner")
        return self
