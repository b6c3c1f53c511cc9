from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse, CachedResponse
from assetdesk.schemas.activity import (
    HistoryCreate, HistoryUpdate, HistoryResponse, HistoryDeleteRequest,
    CompletedHistoryResponse, ScheduledHistoryResponse,
)
from assetdesk.services.dates import local_today
import assetdesk.services.activity_service as svc

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=CachedResponse[list[HistoryResponse]])
def list_history(referenceid: str = "", db: Session = Depends(get_db)):
    rows, cached = svc.get_history(db, referenceid)
    return {"data": rows, "cached": cached}


@router.get("/completed", response_model=DataResponse[list[CompletedHistoryResponse]])
def completed(referenceid: str = "", db: Session = Depends(get_db)):
    return {"data": svc.completed_history(db, referenceid)}


@router.get("/scheduled", response_model=DataResponse[ScheduledHistoryResponse])
def scheduled(
    referenceid: str = "",
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    today = local_today(settings.APP_TIMEZONE)
    return {"data": svc.scheduled_history(db, referenceid, today, date_from, date_to)}


@router.post("", response_model=DataResponse[HistoryResponse], status_code=201)
def create_history(data: HistoryCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_history(db, data)}


@router.patch("/{history_id}", response_model=DataResponse[HistoryResponse])
def update_history(history_id: int, data: HistoryUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_history(db, history_id, data)}


@router.patch("/{history_id}/done", response_model=DataResponse[HistoryResponse])
def mark_done(history_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.mark_done(db, history_id)}


@router.delete("")
def delete_history(data: HistoryDeleteRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "deleted": svc.delete_history(db, data.ids, data.remarks)}}
