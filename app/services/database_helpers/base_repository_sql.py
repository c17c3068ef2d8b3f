# /app/services/database_helpers/base_repository_sql.py

"""
Shared commit handling for the SQL repositories.

Uniqueness and optimistic-concurrency violations are detected by the database
and SQLAlchemy at flush time. They are translated here into the portal's
typed errors so a lost race looks exactly like a failed pre-check to callers.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConcurrentUpdateError, DuplicateError

logger = logging.getLogger(__name__)


class BaseRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, duplicate_message: str = "A record with the same unique key already exists"):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Unique constraint rejected write: {e.orig}")
            raise DuplicateError(duplicate_message)
        except StaleDataError:
            self.db.rollback()
            logger.warning("Optimistic concurrency check rejected a stale write")
            raise ConcurrentUpdateError("The record was modified by another request. Reload it and try again.")

    def _add(self, obj, duplicate_message: str = "A record with the same unique key already exists"):
        self.db.add(obj)
        self._commit(duplicate_message)
        self.db.refresh(obj)
        return obj

    def _apply(self, obj, data: dict, duplicate_message: str = "A record with the same unique key already exists"):
        for key, value in data.items():
            setattr(obj, key, value)
        self._commit(duplicate_message)
        self.db.refresh(obj)
        return obj
