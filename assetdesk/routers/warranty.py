from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.schemas.common import DataResponse
from assetdesk.schemas.dashboard import DashboardResponse
from assetdesk.schemas.inventory import InventoryResponse, WarrantyResponse
from assetdesk.services.dates import local_today
import assetdesk.services.inventory_service as svc
import assetdesk.services.dashboard_service as dashboard_svc

router = APIRouter(prefix="/api", tags=["warranty"])


@router.get("/warranty", response_model=DataResponse[list[WarrantyResponse]])
def warranty(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.warranty_view(db, referenceid, local_today(settings.APP_TIMEZONE))}


@router.get("/disposals", response_model=DataResponse[list[InventoryResponse]])
def disposals(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": svc.disposal_view(db, referenceid)}


@router.get("/dashboard", response_model=DataResponse[DashboardResponse])
def dashboard(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"data": dashboard_svc.get_dashboard(db, referenceid)}
