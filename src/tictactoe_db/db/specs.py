from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ASCENDING = 1
DESCENDING = -1


@dataclass(frozen=True)
class IndexSpec:
    """A secondary index as (field, direction) pairs, in key order."""

    keys: tuple[tuple[str, int], ...]
    unique: bool = False

    @property
    def name(self) -> str:
        # Same naming rule the driver applies when no name is passed.
        return "_".join(f"{key}_{direction}" for key, direction in self.keys)

    def create_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"name": self.name}
        if self.unique:
            kwargs["unique"] = True
        return kwargs


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    validator: dict[str, Any]
    indexes: tuple[IndexSpec, ...] = field(default_factory=tuple)

    @property
    def index_names(self) -> list[str]:
        return [index.name for index in self.indexes]


def json_schema(
    *,
    required: list[str],
    properties: dict[str, Any],
) -> dict[str, Any]:
    """Wrap an object schema in the `$jsonSchema` validator envelope."""
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": required,
            "properties": properties,
        }
    }
