"""
Per-user key/value store for UI state: reminder dismissals, open sidebar
sections and similar. Values are any JSON-serializable object.
"""
import copy
import threading
from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy import select

from assetdesk.models.preference import Preference

SIDEBAR_OPEN_SECTIONS = "sidebarOpenSections"
DISMISSED_MEETINGS = "dismissedMeetings"
DISMISSED_LOGOUT_REMINDERS = "dismissedLogoutReminders"


class PreferenceStore:
    def load(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryPreferenceStore(PreferenceStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def load(self, key, default=None):
        with self._lock:
            if key not in self._values:
                return default
            return copy.deepcopy(self._values[key])

    def save(self, key, value):
        with self._lock:
            self._values[key] = copy.deepcopy(value)


class DatabasePreferenceStore(PreferenceStore):
    """Rows of the ``preferences`` table belonging to one user."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _row(self, key: str) -> Preference | None:
        return self.db.scalar(
            select(Preference).where(Preference.user_id == self.user_id, Preference.key == key)
        )

    def load(self, key, default=None):
        row = self._row(key)
        return default if row is None else copy.deepcopy(row.value)

    def save(self, key, value):
        row = self._row(key)
        if row is None:
            self.db.add(Preference(user_id=self.user_id, key=key, value=value))
        else:
            row.value = value
        self.db.commit()
