from __future__ import annotations

from bson import ObjectId
from pydantic import Field, model_validator

from tictactoe_db.db.models._base import Document
from tictactoe_db.db.specs import ASCENDING, CollectionSpec, IndexSpec, json_schema

# Larger Python ints encode as BSON long, which `bsonType: "int"` rejects.
INT32_MAX = 2**31 - 1

_COUNTER = {"bsonType": "int", "minimum": 0}

LEADERBOARDS_VALIDATOR = json_schema(
    required=[
        "user_id",
        "games_played",
        "games_won",
        "games_drawn",
        "games_lost",
        "win_rate",
        "ranking",
    ],
    properties={
        "user_id": {"bsonType": "objectId", "description": "Reference to user"},
        "games_played": dict(_COUNTER),
        "games_won": dict(_COUNTER),
        "games_drawn": dict(_COUNTER),
        "games_lost": dict(_COUNTER),
        "win_rate": {"bsonType": "double", "minimum": 0.0, "maximum": 1.0},
        "ranking": {"bsonType": "int", "minimum": 1},
    },
)

LEADERBOARDS = CollectionSpec(
    name="leaderboards",
    validator=LEADERBOARDS_VALIDATOR,
    indexes=(
        IndexSpec(keys=(("ranking", ASCENDING),), unique=True),
        IndexSpec(keys=(("user_id", ASCENDING),), unique=True),
    ),
)


class LeaderboardEntry(Document):
    user_id: ObjectId
    games_played: int = Field(default=0, ge=0, le=INT32_MAX)
    games_won: int = Field(default=0, ge=0, le=INT32_MAX)
    games_drawn: int = Field(default=0, ge=0, le=INT32_MAX)
    games_lost: int = Field(default=0, ge=0, le=INT32_MAX)
    win_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    ranking: int = Field(ge=1, le=INT32_MAX)

    @model_validator(mode="after")
    def check_counters(self) -> LeaderboardEntry:
        total = self.games_won + self.games_drawn + self.games_lost
        if self.games_played != total:
            raise ValueError(
                f"games_played={self.games_played} but won+drawn+lost={total}"
            )
        return self
