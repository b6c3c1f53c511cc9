from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse, CachedResponse, Page, IdsRequest
from assetdesk.schemas.inventory import (
    InventoryCreate, InventoryUpdate, InventoryResponse, StatusChangeRequest, AssetTagResponse,
)
from assetdesk.services.asset_tag_service import next_asset_tag
from assetdesk.services.dates import local_today
import assetdesk.services.inventory_service as svc

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=Page[InventoryResponse])
def list_inventory(
    referenceid: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=500),
    status: str | None = None,
    asset_type: str | None = None,
    location: str | None = None,
    department: str | None = None,
    brand: str | None = None,
    model: str | None = None,
    processor: str | None = None,
    storage: str | None = None,
    search: str = Query(""),
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    return svc.get_inventory(
        db, referenceid, page=page, size=size, status=status, asset_type=asset_type,
        search=search, date_from=date_from, date_to=date_to,
        location=location, department=department, brand=brand, model=model,
        processor=processor, storage=storage,
    )


@router.get("/all", response_model=CachedResponse[list[InventoryResponse]])
def all_inventory(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    rows, cached = svc.inventory_snapshot(db, referenceid)
    return {"data": rows, "cached": cached}


@router.get("/next-asset-tag", response_model=AssetTagResponse)
def get_next_asset_tag(asset_type: str | None = None, db: Session = Depends(get_db)):
    return {"asset_tag": next_asset_tag(db, asset_type, local_today(settings.APP_TIMEZONE).year)}


@router.get("/old-items", response_model=DataResponse[list[InventoryResponse]])
def old_items(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.old_items(db, referenceid, local_today(settings.APP_TIMEZONE))}


@router.post("", response_model=DataResponse[InventoryResponse], status_code=201)
def create_item(data: InventoryCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_item(db, data)}


@router.post("/status")
def change_status(data: StatusChangeRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "updated": svc.change_status(db, data.ids, data.new_status)}}


@router.delete("")
def delete_items(data: IdsRequest, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": {"success": True, "deleted": svc.delete_items(db, data.ids)}}


@router.get("/{item_id}", response_model=DataResponse[InventoryResponse])
def get_item(item_id: int, db: Session = Depends(get_db)):
    return {"data": svc.get_item(db, item_id)}


@router.put("/{item_id}", response_model=DataResponse[InventoryResponse])
def update_item(item_id: int, data: InventoryUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_item(db, item_id, data)}
