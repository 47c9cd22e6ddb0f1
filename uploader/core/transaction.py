"""
Store uploads as part of a database transaction.

The entity row is flushed first so filename functions can use generated
values such as the primary key. When a file cannot be stored the transaction
is rolled back and the failure raised; files written before the failure are
left on disk, the rolled back row no longer references them.
"""

import logging
from typing import TypeVar

from sqlalchemy.orm import Session

from uploader.services.storage import store_files

logger = logging.getLogger(__name__)

T = TypeVar("T")


def save_with_uploads(session: Session, entity: T) -> T:
    """
    Insert or update an entity and store its pending uploads in one unit.

    Raises:
        StoreFailure: The first upload that could not be stored
    """
    try:
        session.add(entity)
        session.flush()
        result = store_files(entity)
    except Exception:
        session.rollback()
        raise

    if not result.ok:
        logger.warning(f"Rolling back {type(entity).__name__}: {result.failure}")
        session.rollback()
        result.raise_for_failure()

    session.commit()
    clear = getattr(entity, "clear_uploads", None)
    if callable(clear):
        clear()
    logger.info(f"Saved {type(entity).__name__} with {len(result.written)} file(s) written, "
                f"{len(result.skipped)} skipped")
    return entity
