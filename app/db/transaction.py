from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a write request as one all-or-nothing unit.

    Repositories only flush; the commit happens here once every step
    succeeded. Any exception rolls back everything flushed so far and is
    re-raised unchanged.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
