from datetime import datetime, date, time, timezone
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException

from assetdesk.config import settings
from assetdesk.models.meeting import Meeting
from assetdesk.realtime import feed
from assetdesk.schemas.meeting import MeetingCreate, MeetingResponse

TABLE = "meetings"


def _publish(meeting: Meeting, event_type: str) -> None:
    feed.publish(TABLE, event_type, MeetingResponse.model_validate(meeting).model_dump(mode="json"))


def to_utc(value: datetime) -> datetime:
    """Meetings are stored in UTC; naive input is local app time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(settings.APP_TIMEZONE))
    return value.astimezone(timezone.utc)


def _start_of_day(day: date) -> datetime:
    return to_utc(datetime.combine(day, time.min))


def get_meetings(db: Session, referenceid: str, today: date) -> list[Meeting]:
    """Meetings that have not ended before today, newest first."""
    return db.scalars(
        select(Meeting)
        .where(Meeting.referenceid == referenceid, Meeting.end_date >= _start_of_day(today))
        .order_by(Meeting.start_date.desc())
    ).all()


def get_meeting(db: Session, meeting_id: int) -> Meeting:
    meeting = db.get(Meeting, meeting_id)
    if not meeting:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return meeting


def create_meeting(db: Session, data: MeetingCreate) -> Meeting:
    payload = data.model_dump()
    payload["start_date"] = to_utc(payload["start_date"])
    payload["end_date"] = to_utc(payload["end_date"])
    meeting = Meeting(**payload)
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    _publish(meeting, "insert")
    return meeting


def delete_meeting(db: Session, meeting_id: int) -> dict:
    meeting = get_meeting(db, meeting_id)
    record = MeetingResponse.model_validate(meeting).model_dump(mode="json")
    db.delete(meeting)
    db.commit()
    feed.publish(TABLE, "delete", record)
    return record
