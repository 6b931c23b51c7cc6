"""Unit of work: one session, its stores and an atomic commit."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from ..repositories import EventStore, LedgerEntryStore, ProductStore, RedemptionRequestStore, UserStore
from .config import get_settings
from .database import SessionLocal
from .errors import ConflictError, InvalidStateError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNIQUE_MESSAGES = {
    "users_email_unique": "A user with this email already exists.",
    "users_employee_id_unique": "A user with this employee ID already exists.",
    "users.email": "A user with this email already exists.",
    "users.employee_id": "A user with this employee ID already exists.",
}


def _unique_violation_message(exc: IntegrityError) -> Optional[str]:
    """Return the user-facing message for a known uniqueness violation, else None."""

    text = str(exc.orig)
    for marker, message in _UNIQUE_MESSAGES.items():
        if marker in text:
            return message
    return None


class UnitOfWork:
    """Owns a session for the lifetime of one use case.

    Usage::

        with UnitOfWork(SessionLocal) as uow:
            user = uow.users.get_for_update(user_id)
            user.credit_points(10)
            uow.commit()

    Leaving the block without committing rolls everything back.
    """

    session: Session

    def __init__(self, session_factory: Optional[sessionmaker] = None) -> None:
        self._session_factory = session_factory or SessionLocal

    def __enter__(self) -> "UnitOfWork":
        self.session = self._session_factory()
        self.users = UserStore(self.session)
        self.products = ProductStore(self.session)
        self.redemptions = RedemptionRequestStore(self.session)
        self.ledger = LedgerEntryStore(self.session)
        self.events = EventStore(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # close() rolls back anything uncommitted and detaches loaded objects unexpired.
        self.session.close()

    def commit(self) -> None:
        """Flush and commit every pending change, translating storage conflicts."""

        try:
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            logger.warning("concurrency conflict detected at commit: %s", exc)
            raise ConflictError(
                "The record was modified by another operation. Please refresh and try again.",
                retryable=True,
            ) from exc
        except IntegrityError as exc:
            self.session.rollback()
            message = _unique_violation_message(exc)
            if message is None:
                # CHECK and foreign-key failures are not duplicates.
                logger.warning("integrity violation at commit: %s", exc.orig)
                raise InvalidStateError("The change violates a data integrity rule.") from exc
            logger.warning("unique constraint violation at commit: %s", message)
            raise ConflictError(message) from exc

    def rollback(self) -> None:
        self.session.rollback()

    def run(
        self,
        operation: Callable[["UnitOfWork"], T],
        *,
        attempts: Optional[int] = None,
        backoff_ms: Optional[int] = None,
    ) -> T:
        """Run ``operation`` and re-run it from scratch on retryable conflicts."""

        settings = get_settings()
        attempts = attempts if attempts is not None else settings.conflict_retry_attempts
        backoff_ms = backoff_ms if backoff_ms is not None else settings.conflict_retry_backoff_ms

        attempt = 1
        while True:
            try:
                return operation(self)
            except ConflictError as exc:
                self.session.rollback()
                if not exc.retryable or attempt >= attempts:
                    raise
                logger.info("retrying after conflict (attempt %s of %s)", attempt, attempts)
                time.sleep(backoff_ms * attempt / 1000)
                attempt += 1
