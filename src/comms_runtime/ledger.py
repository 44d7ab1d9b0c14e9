"""
Registration ledger: remembers which feature groups were already wired.

A ledger lives as long as the application builder that owns it. Entries are
only ever added.
"""

import threading
from enum import Enum


class FeatureGroup(str, Enum):
    """Communications capabilities enabled as a unit."""

    EMAIL = "email"
    SMS = "sms"


def group_key(group: str) -> str:
    """Normalized ledger key for a feature group or its name."""
    if isinstance(group, Enum):
        group = group.value
    return str(group).lower()


class RegistrationLedger:
    """Set of feature groups whose providers have been registered."""

    def __init__(self) -> None:
        self._registered: set[str] = set()
        self._lock = threading.Lock()

    def is_registered(self, group: str) -> bool:
        return group_key(group) in self._registered

    def mark_registered(self, group: str) -> None:
        with self._lock:
            self._registered.add(group_key(group))

    def try_mark(self, group: str) -> bool:
        """Mark ``group`` and report whether this call did the marking.

        Check and set happen under one lock, so exactly one of several
        concurrent callers gets ``True``.
        """
        key = group_key(group)
        with self._lock:
            if key in self._registered:
                return False
            self._registered.add(key)
            return True

    @property
    def groups(self) -> frozenset[str]:
        return frozenset(self._registered)

    def __contains__(self, group: object) -> bool:
        return isinstance(group, str) and self.is_registered(group)

    def __len__(self) -> int:
        return len(self._registered)
