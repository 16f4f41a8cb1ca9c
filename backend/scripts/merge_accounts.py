"""Merge one account into another.

Prints the merge preview by default; pass --apply to run the merge.

Usage (from repository root):
    python backend/scripts/merge_accounts.py --from old-slug --into new-slug
    python backend/scripts/merge_accounts.py --from old-slug --into new-slug --apply --acting-user-id 1

Usage (from backend directory):
    python -m scripts.merge_accounts --from old-slug --into new-slug
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

# Make `app` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.account_merge import IneligibleMergeError, MissingLinkedIdentityError
from app.config import get_settings
from app.db.session import SessionLocal
from app.models.migration_log import MigrationLog
from app.schemas.migration_log import MigrationLogRead
from app.services.account_merge import merge_accounts, simulate_merge_accounts
from app.services.database import get_collective_by_slug, get_merged_into_id

logger = logging.getLogger("scripts.merge_accounts")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Merge one account into another.")
    parser.add_argument("--from", dest="from_slug", required=True, help="Slug of the account to retire.")
    parser.add_argument("--into", dest="into_slug", required=True, help="Slug of the account to keep.")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Run the merge. Without this flag only the preview is printed.",
    )
    parser.add_argument(
        "--acting-user-id",
        type=int,
        default=None,
        help="User id recorded as the author of the migration log.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Print the merge preview and optionally apply it. Returns the process exit code."""

    args = parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())

    with SessionLocal() as db:
        source = get_collective_by_slug(db, args.from_slug)
        destination = get_collective_by_slug(db, args.into_slug)
        if source is None:
            retired_slug = f"{args.from_slug}{get_settings().merge_slug_suffix}"
            retired = get_collective_by_slug(db, retired_slug, include_deleted=True)
            merged_into = get_merged_into_id(retired) if retired is not None else None
            if merged_into is not None:
                print(f"@{args.from_slug} was already merged into account #{merged_into}", file=sys.stderr)
                return 1

        try:
            print(simulate_merge_accounts(db, source, destination))
            if not args.apply:
                print("Dry run only. Re-run with --apply to merge.")
                return 0
            result = merge_accounts(db, source, destination, args.acting_user_id)
        except (IneligibleMergeError, MissingLinkedIdentityError) as exc:
            print(f"Cannot merge: {exc}", file=sys.stderr)
            return 1
        except SQLAlchemyError:
            logger.exception("Merge aborted; no changes were saved.")
            return 2

        migration_log = db.get(MigrationLog, result.migration_log_id)
        print("Merge complete")
        print(result.model_dump_json(indent=2))
        if migration_log is not None:
            print(MigrationLogRead.model_validate(migration_log).model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
