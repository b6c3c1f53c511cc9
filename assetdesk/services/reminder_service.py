"""
Reminder engine.

A meeting reminder fires when a meeting starts on the current local day
within five minutes of now. The logout reminder fires at 16:30 local time.
Dismissals are stored per day in the user's preference store, so a dismissed
reminder stays quiet until the next day.
"""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from assetdesk.services.preference_service import (
    PreferenceStore, DISMISSED_MEETINGS, DISMISSED_LOGOUT_REMINDERS,
)

MEETING_WINDOW = timedelta(minutes=5)
LOGOUT_HOUR = 16
LOGOUT_MINUTE = 30


def _local(value: datetime, tz: ZoneInfo) -> datetime:
    # stored meeting times come back naive UTC from some backends
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def _day_key(now: datetime) -> str:
    return now.date().isoformat()


def dismissed_meetings(store: PreferenceStore, now: datetime) -> set[str]:
    data = store.load(DISMISSED_MEETINGS, {}) or {}
    return {str(i) for i in data.get(_day_key(now), [])}


def due_meeting(meetings, now: datetime, store: PreferenceStore, tz_name: str):
    """First meeting starting today within the window that was not dismissed."""
    tz = ZoneInfo(tz_name)
    now = _local(now, tz)
    dismissed = dismissed_meetings(store, now)
    for meeting in meetings:
        if str(meeting.id) in dismissed:
            continue
        start = _local(meeting.start_date, tz)
        if start.date() != now.date():
            continue
        if abs(now - start) <= MEETING_WINDOW:
            return meeting
    return None


def logout_due(now: datetime, store: PreferenceStore, tz_name: str) -> bool:
    now = _local(now, ZoneInfo(tz_name))
    if (now.hour, now.minute) != (LOGOUT_HOUR, LOGOUT_MINUTE):
        return False
    data = store.load(DISMISSED_LOGOUT_REMINDERS, {}) or {}
    return not data.get(_day_key(now))


def dismiss_meeting(store: PreferenceStore, meeting_id, now: datetime, tz_name: str) -> None:
    now = _local(now, ZoneInfo(tz_name))
    data = store.load(DISMISSED_MEETINGS, {}) or {}
    day = data.setdefault(_day_key(now), [])
    if str(meeting_id) not in {str(i) for i in day}:
        day.append(str(meeting_id))
    store.save(DISMISSED_MEETINGS, data)


def dismiss_logout(store: PreferenceStore, now: datetime, tz_name: str) -> None:
    now = _local(now, ZoneInfo(tz_name))
    data = store.load(DISMISSED_LOGOUT_REMINDERS, {}) or {}
    data[_day_key(now)] = True
    store.save(DISMISSED_LOGOUT_REMINDERS, data)
