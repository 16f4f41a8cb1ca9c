"""Transaction scope helper for multi-statement writes."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run the enclosed block as one transaction.

    Commits when the block exits normally. Any exception, including
    ``KeyboardInterrupt`` or a failing commit, rolls back every pending
    change before it propagates, so callers observe either the whole unit
    of work or none of it.
    """

    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
