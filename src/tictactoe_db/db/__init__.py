from . import enums, models
from .client import close_client, create_client, get_client, get_database
from .errors import SchemaConflictError, SchemaInitError
from .schema import COLLECTIONS, initialize_schema, verify_schema

__all__ = [
    "COLLECTIONS",
    "SchemaConflictError",
    "SchemaInitError",
    "close_client",
    "create_client",
    "enums",
    "get_client",
    "get_database",
    "initialize_schema",
    "models",
    "verify_schema",
]
