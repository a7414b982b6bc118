from __future__ import annotations

from typing import Any


class SchemaInitError(Exception):
    """Base error raised by the schema initializer itself."""


class SchemaConflictError(SchemaInitError):
    """A collection exists with a validator different from the expected one."""

    def __init__(
        self,
        collection: str,
        *,
        expected: dict[str, Any],
        actual: dict[str, Any] | None,
    ) -> None:
        super().__init__(
            f"collection '{collection}' already exists with a conflicting validator; "
            "re-run with --update-validators to replace it"
        )
        self.collection = collection
        self.expected = expected
        self.actual = actual
