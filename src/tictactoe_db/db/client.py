from __future__ import annotations

from functools import lru_cache
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from tictactoe_db.config import Settings, get_settings


def create_client(settings: Settings, uri: str | None = None) -> AsyncMongoClient[dict[str, Any]]:
    return AsyncMongoClient(
        uri or settings.mongodb_uri,
        appname=settings.app_name,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
        connectTimeoutMS=settings.db_connect_timeout_ms,
    )


@lru_cache(maxsize=1)
def get_client(uri: str | None = None) -> AsyncMongoClient[dict[str, Any]]:
    """Process-wide client; `uri` overrides the one built from settings."""
    return create_client(get_settings(), uri=uri)


def get_database(
    client: AsyncMongoClient[dict[str, Any]] | None = None,
    settings: Settings | None = None,
) -> AsyncDatabase[dict[str, Any]]:
    """Database named in the connection URI, else `db_name` from settings."""
    cfg = settings or get_settings()
    mongo = client or get_client()
    return mongo.get_default_database(default=cfg.db_name)


async def close_client(uri: str | None = None) -> None:
    if get_client.cache_info().currsize:
        await get_client(uri).close()
    get_client.cache_clear()
