from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.models.user import User
from assetdesk.routers.auth import current_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.meeting import ReminderResponse
from assetdesk.services.preference_service import DatabasePreferenceStore
import assetdesk.services.meeting_service as meeting_svc
import assetdesk.services.reminder_service as svc

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _now(now: datetime | None) -> datetime:
    return meeting_svc.to_utc(now) if now else datetime.now(timezone.utc)


@router.get("", response_model=DataResponse[ReminderResponse])
def get_reminders(
    now: datetime | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
):
    now = _now(now)
    store = DatabasePreferenceStore(db, user.id)
    today = now.astimezone(ZoneInfo(settings.APP_TIMEZONE)).date()
    meetings = meeting_svc.get_meetings(db, user.reference_id, today)
    return {"data": {
        "meeting": svc.due_meeting(meetings, now, store, settings.APP_TIMEZONE),
        "logout_due": svc.logout_due(now, store, settings.APP_TIMEZONE),
    }}


@router.post("/meetings/{meeting_id}/dismiss")
def dismiss_meeting(
    meeting_id: int,
    now: datetime | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
):
    meeting_svc.get_meeting(db, meeting_id)
    svc.dismiss_meeting(DatabasePreferenceStore(db, user.id), meeting_id, _now(now), settings.APP_TIMEZONE)
    return {"data": {"success": True}}


@router.post("/logout/dismiss")
def dismiss_logout(
    now: datetime | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
):
    svc.dismiss_logout(DatabasePreferenceStore(db, user.id), _now(now), settings.APP_TIMEZONE)
    return {"data": {"success": True}}
