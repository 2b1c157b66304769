"""Create (or reset) the WikiReview schema for the configured database."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from wikireview.core.settings import settings
from wikireview.db.session import Database


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the WikiReview tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop every table before creating the schema.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)

    database = Database(args.url or settings.effective_database_url)
    try:
        if args.drop:
            database.drop_tables()
            print("[init_db] dropped all tables")
        database.create_tables()
        print("[init_db] schema is up to date")
    except SQLAlchemyError as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
