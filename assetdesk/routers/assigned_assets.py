from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.assignment import AssignRequest, AssignUpdate, AssignResult, AssignedAssetResponse
import assetdesk.services.assignment_service as svc

router = APIRouter(prefix="/api/assigned-assets", tags=["assigned-assets"])


@router.get("", response_model=DataResponse[list[AssignedAssetResponse]])
def list_assigned(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.get_assigned_assets(db, referenceid)}


@router.post("", response_model=DataResponse[AssignResult], status_code=201)
def assign(data: AssignRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.assign_assets(db, data)}


@router.get("/batch/{assigned_number}", response_model=DataResponse[list[AssignedAssetResponse]])
def get_batch(assigned_number: str, db: Session = Depends(get_db)):
    return {"data": svc.get_batch(db, assigned_number)}


@router.put("/{row_id}", response_model=DataResponse[AssignedAssetResponse])
def update_assigned(row_id: int, data: AssignUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_assigned_asset(db, row_id, data)}


@router.delete("/{row_id}", response_model=DataResponse[AssignedAssetResponse])
def delete_assigned(row_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.delete_assigned_asset(db, row_id)}
