from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pymongo.errors import PyMongoError

from tictactoe_db.config import Settings, get_settings
from tictactoe_db.db.client import close_client, get_client, get_database
from tictactoe_db.db.errors import SchemaInitError
from tictactoe_db.db.schema import COMPLETION_MESSAGE, initialize_schema, verify_schema
from tictactoe_db.observability import configure_logging

logger = logging.getLogger("tictactoe_db.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tictactoe-db-init",
        description="Create the users, games and leaderboards collections with validators and indexes.",
    )
    parser.add_argument(
        "uri",
        nargs="?",
        default=None,
        help="mongodb://<user>:<pass>@<host>:<port>/<db>?authSource=admin "
        "(default: built from DATABASE_URL / DB_* settings).",
    )
    parser.add_argument(
        "--update-validators",
        action="store_true",
        default=None,
        help="Replace the validator of an existing collection instead of failing.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Only check that the schema is applied; exit 1 if anything is missing.",
    )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    client = get_client(args.uri)
    try:
        db = get_database(client, settings)
        await client.admin.command("ping")

        if args.verify:
            problems = await verify_schema(db)
            for problem in problems:
                print(problem)
            if problems:
                logger.warning("schema_verify_failed", extra={"problems": len(problems)})
                return 1
            print(f"Schema of '{db.name}' is up to date.")
            return 0

        update_validators = args.update_validators
        if update_validators is None:
            update_validators = settings.schema_update_validators
        await initialize_schema(db, update_validators=update_validators)
    finally:
        await close_client(args.uri)

    print(COMPLETION_MESSAGE)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    try:
        return asyncio.run(run(args, settings))
    except (PyMongoError, SchemaInitError) as exc:
        logger.error(
            "schema_init_failed",
            extra={"error_type": type(exc).__name__, "error": str(exc)},
        )
        print(f"error: {exc}", file=sys.stderr)
        return 1


def entrypoint() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entrypoint()
