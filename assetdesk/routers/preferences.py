from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.models.user import User
from assetdesk.routers.auth import current_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.preference import PreferenceValue, PreferenceResponse
from assetdesk.services.preference_service import DatabasePreferenceStore

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("/{key}", response_model=DataResponse[PreferenceResponse])
def get_preference(key: str, db: Session = Depends(get_db), user: User = Depends(current_user)):
    return {"data": {"key": key, "value": DatabasePreferenceStore(db, user.id).load(key)}}


@router.put("/{key}", response_model=DataResponse[PreferenceResponse])
def put_preference(key: str, data: PreferenceValue, db: Session = Depends(get_db), user: User = Depends(current_user)):
    store = DatabasePreferenceStore(db, user.id)
    store.save(key, data.value)
    return {"data": {"key": key, "value": store.load(key)}}
