"""In-memory stand-ins for the pymongo async objects the initializer touches."""
from __future__ import annotations

import copy
from typing import Any

from pymongo.errors import CollectionInvalid, DuplicateKeyError


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return list(self._documents[:length] if length else self._documents)


class FakeCollection:
    def __init__(self, database: FakeDatabase, name: str) -> None:
        self.database = database
        self.name = name
        self.indexes: dict[str, dict[str, Any]] = {"_id_": {"v": 2, "key": [("_id", 1)]}}

    async def create_index(self, keys: list[tuple[str, int]], **kwargs: Any) -> str:
        name = kwargs["name"]
        self.database.calls.append(("create_index", self.name, name))
        if name in self.database.failing_indexes:
            raise DuplicateKeyError(f"E11000 duplicate key error index: {name}", code=11000)
        info: dict[str, Any] = {"v": 2, "key": list(keys)}
        if kwargs.get("unique"):
            info["unique"] = True
        self.indexes[name] = info
        return name

    async def index_information(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self.indexes)


class FakeDatabase:
    """In-memory stand-in for the subset of AsyncDatabase the initializer uses."""

    name = "tic_tac_toe"

    def __init__(self) -> None:
        self.options: dict[str, dict[str, Any]] = {}
        self.collections: dict[str, FakeCollection] = {}
        self.calls: list[tuple[str, ...]] = []
        self.failing_indexes: set[str] = set()

    async def list_collections(self, filter: dict[str, Any] | None = None) -> FakeCursor:  # noqa: A002
        name = (filter or {}).get("name")
        infos = [
            {"name": coll, "type": "collection", "options": copy.deepcopy(opts)}
            for coll, opts in self.options.items()
            if name is None or coll == name
        ]
        return FakeCursor(infos)

    async def create_collection(self, name: str, **kwargs: Any) -> FakeCollection:
        self.calls.append(("create_collection", name))
        if name in self.options:
            raise CollectionInvalid(f"collection {name} already exists")
        self.options[name] = copy.deepcopy(kwargs)
        return self[name]

    async def command(self, command: str, value: str, **kwargs: Any) -> dict[str, Any]:
        self.calls.append((command, value))
        if command != "collMod":
            raise AssertionError(f"unexpected command {command}")
        self.options[value]["validator"] = copy.deepcopy(kwargs["validator"])
        return {"ok": 1.0}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(self, name)
        return self.collections[name]



class FakeAdmin:
    def __init__(self) -> None:
        self.commands: list[str] = []

    async def command(self, command: str) -> dict[str, Any]:
        self.commands.append(command)
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self, database: FakeDatabase | None = None) -> None:
        self.database = database or FakeDatabase()
        self.admin = FakeAdmin()
        self.closed = False

    def get_default_database(self, default: str | None = None) -> FakeDatabase:
        return self.database

    async def close(self) -> None:
        self.closed = True
