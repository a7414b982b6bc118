"""Provision the tic-tac-toe collections, validators and indexes.

Each step is idempotent on its own. Steps run in a fixed order
(users, games, leaderboards) and nothing is rolled back: a failure leaves the
earlier steps applied, and re-running converges on the full schema.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from tictactoe_db.db.errors import SchemaConflictError
from tictactoe_db.db.models import GAMES, LEADERBOARDS, USERS
from tictactoe_db.db.specs import CollectionSpec

logger = logging.getLogger(__name__)

COLLECTIONS: tuple[CollectionSpec, ...] = (USERS, GAMES, LEADERBOARDS)

COMPLETION_MESSAGE = "Tic Tac Toe DB schema initialized successfully."


class CollectionAction(str, Enum):
    CREATED = "created"
    UNCHANGED = "unchanged"
    VALIDATOR_UPDATED = "validator_updated"


@dataclass
class CollectionResult:
    name: str
    action: CollectionAction
    indexes: list[str] = field(default_factory=list)


@dataclass
class SchemaReport:
    collections: list[CollectionResult] = field(default_factory=list)

    def get(self, name: str) -> CollectionResult | None:
        for result in self.collections:
            if result.name == name:
                return result
        return None

    @property
    def created(self) -> list[str]:
        return [r.name for r in self.collections if r.action == CollectionAction.CREATED]


async def get_collection_options(
    db: AsyncDatabase[dict[str, Any]],
    name: str,
) -> dict[str, Any] | None:
    """Stored creation options of `name`, or None when it does not exist."""
    cursor = await db.list_collections(filter={"name": name})
    infos = await cursor.to_list(length=None)
    if not infos:
        return None
    return dict(infos[0].get("options") or {})


async def ensure_collection(
    db: AsyncDatabase[dict[str, Any]],
    spec: CollectionSpec,
    *,
    update_validators: bool = False,
) -> CollectionAction:
    options = await get_collection_options(db, spec.name)
    if options is None:
        await db.create_collection(spec.name, validator=spec.validator)
        logger.info("collection_created", extra={"collection": spec.name})
        return CollectionAction.CREATED

    current = options.get("validator")
    if current == spec.validator:
        logger.info("collection_unchanged", extra={"collection": spec.name})
        return CollectionAction.UNCHANGED

    if not update_validators:
        raise SchemaConflictError(spec.name, expected=spec.validator, actual=current)

    await db.command("collMod", spec.name, validator=spec.validator)
    logger.warning("collection_validator_updated", extra={"collection": spec.name})
    return CollectionAction.VALIDATOR_UPDATED


async def ensure_indexes(
    db: AsyncDatabase[dict[str, Any]],
    spec: CollectionSpec,
) -> list[str]:
    collection = db[spec.name]
    names: list[str] = []
    for index in spec.indexes:
        name = await collection.create_index(list(index.keys), **index.create_kwargs())
        logger.info(
            "index_ensured",
            extra={"collection": spec.name, "index": name, "unique": index.unique},
        )
        names.append(name)
    return names


async def initialize_schema(
    db: AsyncDatabase[dict[str, Any]],
    *,
    update_validators: bool = False,
    collections: Sequence[CollectionSpec] = COLLECTIONS,
) -> SchemaReport:
    report = SchemaReport()
    for spec in collections:
        action = await ensure_collection(db, spec, update_validators=update_validators)
        indexes = await ensure_indexes(db, spec)
        report.collections.append(CollectionResult(spec.name, action, indexes))
    logger.info(
        "schema_initialized",
        extra={
            "database": db.name,
            "created_collections": report.created,
            "actions": {r.name: r.action.value for r in report.collections},
        },
    )
    return report


async def verify_schema(
    db: AsyncDatabase[dict[str, Any]],
    collections: Sequence[CollectionSpec] = COLLECTIONS,
) -> list[str]:
    """Describe every difference between the database and `collections`."""
    problems: list[str] = []
    for spec in collections:
        options = await get_collection_options(db, spec.name)
        if options is None:
            problems.append(f"{spec.name}: collection is missing")
            continue
        if options.get("validator") != spec.validator:
            problems.append(f"{spec.name}: validator differs from expected")

        info = await db[spec.name].index_information()
        for index in spec.indexes:
            existing = info.get(index.name)
            if existing is None:
                problems.append(f"{spec.name}: index {index.name} is missing")
                continue
            keys = [(key, int(direction)) for key, direction in existing["key"]]
            if keys != list(index.keys):
                problems.append(f"{spec.name}: index {index.name} has keys {keys}")
            if bool(existing.get("unique", False)) != index.unique:
                expected = "unique" if index.unique else "non-unique"
                problems.append(f"{spec.name}: index {index.name} should be {expected}")
    return problems
