"""Account merge planning and execution services."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
import logging
from time import perf_counter

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.account_merge.registry import ACCOUNT_FIELDS, USER_FIELDS, MovableField
from app.account_merge.rules import (
    IneligibleMergeError,
    MissingLinkedIdentityError,
    check_merge_eligibility,
    merged_profile_fields,
    merged_slug,
)
from app.config import get_settings
from app.db.unit_of_work import atomic
from app.models.collective import Collective
from app.models.migration_log import MigrationLog, MigrationLogType
from app.models.user import User
from app.schema.collective_types import USER
from app.schemas.account_merge import MergeAccountsResult

logger = logging.getLogger(__name__)


def count_movable_items(
    db: Session,
    source: Collective,
    *,
    fields: Sequence[MovableField] = ACCOUNT_FIELDS,
) -> dict[str, int]:
    """Count rows per category that a merge of `source` would reassign."""

    return _count_rows(db, fields, source.id)


def count_movable_user_items(
    db: Session,
    user: User,
    *,
    fields: Sequence[MovableField] = USER_FIELDS,
) -> dict[str, int]:
    """Count rows per category authored by `user` that a merge would reassign."""

    return _count_rows(db, fields, user.id)


def simulate_merge_accounts(
    db: Session,
    source: Collective | None,
    destination: Collective | None,
    *,
    account_fields: Sequence[MovableField] = ACCOUNT_FIELDS,
    user_fields: Sequence[MovableField] = USER_FIELDS,
) -> str:
    """Validate a merge and describe what it would change, without writing anything."""

    source, destination = check_merge_eligibility(source, destination)

    lines = ["The profiles information will be merged.", ""]
    moved_counts = count_movable_items(db, source, fields=account_fields)
    if any(count > 0 for count in moved_counts.values()):
        lines.append(f"The following items will be moved to @{destination.slug}:")
        lines.extend(_format_counts(moved_counts))
        lines.append("")

    if source.type == USER:
        from_user, _ = _load_linked_users(db, source, destination)
        user_counts = count_movable_user_items(db, from_user, fields=user_fields)
        if any(count > 0 for count in user_counts.values()):
            lines.append("The following user-level items will be reassigned:")
            lines.extend(_format_counts(user_counts))
            lines.append("")

    return "\n".join(lines) + "\n"


def merge_accounts(
    db: Session,
    source: Collective | None,
    destination: Collective | None,
    acting_user_id: int | None = None,
    *,
    account_fields: Sequence[MovableField] = ACCOUNT_FIELDS,
    user_fields: Sequence[MovableField] = USER_FIELDS,
) -> MergeAccountsResult:
    """Move everything owned by `source` to `destination` and retire `source`.

    All writes happen in one transaction: on any failure nothing is changed.
    For individual (USER) accounts the attached users are merged as well, so
    content authored by the source user is credited to the destination user.
    """

    source, destination = check_merge_eligibility(source, destination)

    from_user: User | None = None
    into_user: User | None = None
    if source.type == USER:
        from_user, into_user = _load_linked_users(db, source, destination)

    # Captured before any write; later statements never re-read the handles.
    source_id = source.id
    destination_id = destination.id
    source_slug = source.slug
    destination_slug = destination.slug
    source_data = dict(source.data or {})
    profile_changes = merged_profile_fields(source, destination)
    slug_suffix = get_settings().merge_slug_suffix

    total_started = perf_counter()
    try:
        with atomic(db):
            _lock_collectives(db, [source_id, destination_id])

            if profile_changes:
                db.execute(
                    update(Collective).where(Collective.id == destination_id).values(**profile_changes)
                )

            changes: dict[str, object] = {
                "fromAccount": source_id,
                "intoAccount": destination_id,
                "fromUser": from_user.id if from_user is not None else None,
                "profileChanges": profile_changes,
            }
            items_moved = 0
            for entry in account_fields:
                moved_ids = _reassign(db, entry, source_id, destination_id)
                changes[entry.name] = moved_ids
                items_moved += len(moved_ids)

            user_items_moved = 0
            if from_user is not None and into_user is not None:
                user_changes: dict[str, list[int]] = {}
                for entry in user_fields:
                    moved_ids = _reassign(db, entry, from_user.id, into_user.id)
                    user_changes[entry.name] = moved_ids
                    user_items_moved += len(moved_ids)
                changes["userChanges"] = user_changes
                db.execute(update(User).where(User.id == from_user.id).values(deleted_at=_utcnow()))

            db.execute(
                update(Collective)
                .where(Collective.id == source_id)
                .values(
                    deleted_at=_utcnow(),
                    slug=merged_slug(source_slug, slug_suffix),
                    data={**source_data, "mergedIntoCollectiveId": destination_id},
                )
            )

            migration_log = MigrationLog(
                type=MigrationLogType.MERGE_ACCOUNTS.value,
                description=f"Merge {source_slug} into {destination_slug}",
                created_by_user_id=acting_user_id,
                data=changes,
            )
            db.add(migration_log)
            db.flush()
            migration_log_id = migration_log.id
    except IneligibleMergeError as exc:
        logger.warning(
            "account_merge.rejected from_collective_id=%s into_collective_id=%s reason=%s",
            source_id,
            destination_id,
            exc,
        )
        raise
    except Exception:
        logger.exception(
            "account_merge.failed from_collective_id=%s into_collective_id=%s elapsed_ms=%.2f",
            source_id,
            destination_id,
            (perf_counter() - total_started) * 1000.0,
        )
        raise

    result = MergeAccountsResult(
        migration_log_id=migration_log_id,
        from_collective_id=source_id,
        into_collective_id=destination_id,
        from_user_id=from_user.id if from_user is not None else None,
        into_user_id=into_user.id if into_user is not None else None,
        items_moved=items_moved,
        user_items_moved=user_items_moved,
        profile_fields_updated=sorted(profile_changes),
    )
    logger.info(
        (
            "account_merge.completed migration_log_id=%s from_collective_id=%s into_collective_id=%s "
            "items_moved=%d user_items_moved=%d total_ms=%.2f"
        ),
        result.migration_log_id,
        result.from_collective_id,
        result.into_collective_id,
        result.items_moved,
        result.user_items_moved,
        (perf_counter() - total_started) * 1000.0,
    )
    return result


def _count_rows(db: Session, fields: Sequence[MovableField], owner_id: int) -> dict[str, int]:
    counts: dict[str, int] = {}
    for entry in fields:
        count = db.scalar(select(func.count()).select_from(entry.model).where(entry.column == owner_id))
        counts[entry.name] = int(count or 0)
    return counts


def _format_counts(counts: dict[str, int]) -> list[str]:
    return [f"  - {name}: {count}" for name, count in counts.items() if count > 0]


def _load_linked_users(db: Session, source: Collective, destination: Collective) -> tuple[User, User]:
    from_user = _get_active_user(db, source.id)
    into_user = _get_active_user(db, destination.id)
    if from_user is None or into_user is None:
        raise MissingLinkedIdentityError("Cannot find one of the user entries to merge")
    return from_user, into_user


def _get_active_user(db: Session, collective_id: int) -> User | None:
    return db.scalar(select(User).where(User.collective_id == collective_id, User.deleted_at.is_(None)))


def _lock_collectives(db: Session, collective_ids: list[int]) -> None:
    # Ordered locking keeps two concurrent merges over the same pair from deadlocking.
    rows = db.execute(
        select(Collective.id, Collective.deleted_at)
        .where(Collective.id.in_(collective_ids))
        .order_by(Collective.id.asc())
        .with_for_update()
    ).all()
    # A merge that held the lock before us may have retired either account.
    active_ids = {row.id for row in rows if row.deleted_at is None}
    if active_ids != set(collective_ids):
        raise IneligibleMergeError("Cannot merge profiles, one of them does not exist")


def _reassign(db: Session, entry: MovableField, from_id: int, into_id: int) -> list[int]:
    stmt = (
        update(entry.model)
        .where(entry.column == from_id)
        .values({entry.column: into_id})
        .returning(entry.id_column)
    )
    return sorted(db.scalars(stmt).all())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
