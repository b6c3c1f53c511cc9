from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse, CachedResponse, IdsRequest
from assetdesk.schemas.activity import ActivityCreate, ActivityUpdate, ActivityResponse
import assetdesk.services.activity_service as svc

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=CachedResponse[list[ActivityResponse]])
def list_activities(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    rows, cached = svc.get_activities(db, referenceid)
    return {"data": rows, "cached": cached}


@router.post("", response_model=DataResponse[ActivityResponse], status_code=201)
def create_activity(data: ActivityCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_activity(db, data)}


@router.patch("/{activity_id}", response_model=DataResponse[ActivityResponse])
def update_activity(activity_id: int, data: ActivityUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_activity(db, activity_id, data)}


@router.delete("")
def delete_activities(data: IdsRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "deleted": svc.delete_activities(db, data.ids)}}
