"""Delete expired login sessions from the configured database."""
from __future__ import annotations

import argparse
import sys

from wikireview.core.errors import StoreError
from wikireview.core.settings import settings
from wikireview.db.session import Database
from wikireview.services.sessions import SessionManager


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Purge expired WikiReview sessions")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)

    database = Database(args.url or settings.effective_database_url)
    db = database.session()
    try:
        removed = SessionManager(db).purge_expired_sessions()
    except StoreError as exc:
        print(f"[purge_sessions] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"[purge_sessions] removed {removed} expired session(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
