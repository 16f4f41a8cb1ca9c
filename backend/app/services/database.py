"""Query services for accounts and migration history."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.collective import Collective
from app.models.migration_log import MigrationLog, MigrationLogType


def get_collective_by_slug(db: Session, slug: str, *, include_deleted: bool = False) -> Collective | None:
    """Return the collective using `slug`, ignoring retired profiles unless asked."""

    clean_slug = slug.strip()
    if not clean_slug:
        return None
    stmt = select(Collective).where(Collective.slug == clean_slug)
    if not include_deleted:
        stmt = stmt.where(Collective.deleted_at.is_(None))
    return db.scalars(stmt.order_by(Collective.id.desc()).limit(1)).first()


def get_merged_into_id(collective: Collective) -> int | None:
    """Return the id of the account `collective` was merged into, if any."""

    value = (collective.data or {}).get("mergedIntoCollectiveId")
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def list_migration_logs(db: Session, migration_type: MigrationLogType | None = None) -> list[MigrationLog]:
    """List migration logs, oldest first."""

    stmt = select(MigrationLog)
    if migration_type is not None:
        stmt = stmt.where(MigrationLog.type == migration_type.value)
    return list(db.scalars(stmt.order_by(MigrationLog.id.asc())).all())
