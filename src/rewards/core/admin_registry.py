"""Process-wide registry of administrator identifiers."""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Iterable, List

from .config import get_settings
from .errors import InvalidStateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class AdminRegistry:
    """Case-insensitive set of admin e-mails or employee ids.

    At least one identifier is present at all times.
    """

    def __init__(self, identifiers: Iterable[str]) -> None:
        self._lock = threading.Lock()
        self._identifiers = {self._key(value) for value in identifiers if value and value.strip()}
        if not self._identifiers:
            raise ValueError("System must be seeded with at least one admin.")

    @staticmethod
    def _key(value: str) -> str:
        return value.strip().casefold()

    def is_admin(self, email: str | None, employee_id: str | None) -> bool:
        candidates = {self._key(value) for value in (email, employee_id) if value and value.strip()}
        with self._lock:
            return not candidates.isdisjoint(self._identifiers)

    def add_admin(self, identifier: str) -> None:
        if identifier is None or not identifier.strip():
            raise ValidationError("Admin identifier is required.")
        with self._lock:
            self._identifiers.add(self._key(identifier))
        logger.info("admin identifier added: %s", identifier.strip())

    def remove_admin(self, identifier: str) -> None:
        if identifier is None or not identifier.strip():
            raise ValidationError("Admin identifier is required.")
        key = self._key(identifier)
        with self._lock:
            if key not in self._identifiers:
                raise NotFoundError("Admin identifier not found.")
            if len(self._identifiers) <= 1:
                raise InvalidStateError("Cannot remove the last admin from the system.")
            self._identifiers.remove(key)
        logger.info("admin identifier removed: %s", identifier.strip())

    def identifiers(self) -> List[str]:
        with self._lock:
            return sorted(self._identifiers)


@lru_cache(maxsize=1)
def get_admin_registry() -> AdminRegistry:
    """Return the registry seeded from settings."""

    return AdminRegistry(get_settings().admin_identifiers)
