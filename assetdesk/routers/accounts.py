from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.account import (
    AccountCreate, AccountUpdate, AccountResponse, NextDateUpdate, QueueResponse,
    AccountRemoveRequest, AccountTransferRequest, DuplicateCheckResponse,
)
from assetdesk.schemas.activity import QueuedActivityResponse
from assetdesk.services.dates import local_today
import assetdesk.services.account_service as svc
import assetdesk.services.cluster_service as cluster_svc

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("", response_model=DataResponse[list[AccountResponse]])
def list_accounts(
    referenceid: str = Query(..., min_length=1),
    type_client: str | None = None,
    db: Session = Depends(get_db),
):
    return {"data": svc.get_accounts(db, referenceid, type_client)}


@router.get("/queue", response_model=DataResponse[QueueResponse])
def get_queue(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": cluster_svc.get_queue(db, referenceid, local_today(settings.APP_TIMEZONE))}


@router.post("", response_model=DataResponse[AccountResponse], status_code=201)
def create_account(data: AccountCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_account(db, data)}


@router.get("/duplicates", response_model=DataResponse[DuplicateCheckResponse])
def check_duplicates(company_name: str = "", db: Session = Depends(get_db)):
    return {"data": svc.find_duplicates(db, company_name)}


@router.put("/remove")
def remove_accounts(data: AccountRemoveRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "updated": svc.remove_accounts(db, data.ids, data.remarks)}}


@router.put("/transfer")
def transfer_accounts(data: AccountTransferRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "updated": svc.transfer_accounts(db, data.ids, data.new_referenceid)}}


@router.get("/{account_id}", response_model=DataResponse[AccountResponse])
def get_account(account_id: int, db: Session = Depends(get_db)):
    return {"data": svc.get_account(db, account_id)}


@router.put("/{account_id}", response_model=DataResponse[AccountResponse])
def update_account(account_id: int, data: AccountUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_account(db, account_id, data)}


@router.patch("/{account_id}/next-date", response_model=DataResponse[AccountResponse])
def set_next_date(account_id: int, data: NextDateUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.set_next_available_date(db, account_id, data.next_available_date)}


@router.post("/{account_id}/queue", response_model=DataResponse[QueuedActivityResponse], status_code=201)
def enqueue(
    account_id: int,
    referenceid: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    return {"data": cluster_svc.enqueue_account(db, account_id, referenceid, local_today(settings.APP_TIMEZONE))}
