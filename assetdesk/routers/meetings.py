from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.meeting import MeetingCreate, MeetingResponse
from assetdesk.services.dates import local_today
import assetdesk.services.meeting_service as svc

router = APIRouter(prefix="/api/meetings", tags=["meetings"])


@router.get("", response_model=DataResponse[list[MeetingResponse]])
def list_meetings(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.get_meetings(db, referenceid, local_today(settings.APP_TIMEZONE))}


@router.post("", response_model=DataResponse[MeetingResponse], status_code=201)
def create_meeting(data: MeetingCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_meeting(db, data)}


@router.delete("/{meeting_id}", response_model=DataResponse[MeetingResponse])
def delete_meeting(meeting_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.delete_meeting(db, meeting_id)}
