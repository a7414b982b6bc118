from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tictactoe_db.db.models._base import Document, utcnow
from tictactoe_db.db.specs import ASCENDING, CollectionSpec, IndexSpec, json_schema

EMAIL_PATTERN = r"^.+@.+\..+$"

USERS_VALIDATOR = json_schema(
    required=["username", "email", "password_hash", "created_at"],
    properties={
        "username": {"bsonType": "string", "description": "Unique user handle"},
        "email": {
            "bsonType": "string",
            "description": "User email",
            "pattern": EMAIL_PATTERN,
        },
        "password_hash": {"bsonType": "string", "description": "Password hash"},
        "profile": {
            "bsonType": "object",
            "description": "Profile info",
            "properties": {
                "avatar": {"bsonType": ["string", "null"], "description": "URL to avatar"},
            },
        },
        "created_at": {"bsonType": "date", "description": "Account creation timestamp"},
        "last_login": {"bsonType": ["date", "null"], "description": "Last login timestamp"},
    },
)

USERS = CollectionSpec(
    name="users",
    validator=USERS_VALIDATOR,
    indexes=(
        IndexSpec(keys=(("username", ASCENDING),), unique=True),
        IndexSpec(keys=(("email", ASCENDING),), unique=True),
    ),
)


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    avatar: str | None = None


class User(Document):
    username: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password_hash: str
    profile: UserProfile | None = None
    created_at: datetime = Field(default_factory=utcnow)
    last_login: datetime | None = None

    def to_document(self) -> dict[str, Any]:
        # `profile` must be an object when present; null is rejected.
        document = super().to_document()
        if document["profile"] is None:
            del document["profile"]
        return document
