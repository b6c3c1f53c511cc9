from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.user import UserDirectoryEntry
import assetdesk.services.user_service as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=DataResponse[list[UserDirectoryEntry]])
def list_users(db: Session = Depends(get_db)):
    return {"data": svc.get_directory(db)}


@router.get("/transfer", response_model=DataResponse[list[UserDirectoryEntry]])
def transfer_targets(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.get_transfer_targets(db, referenceid)}
