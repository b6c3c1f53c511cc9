from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.schemas.common import DataResponse, Page
from assetdesk.schemas.license import LicenseCreate, LicenseUpdate, LicenseResponse
import assetdesk.services.license_service as svc

router = APIRouter(prefix="/api/licenses", tags=["licenses"])


@router.get("", response_model=Page[LicenseResponse])
def list_licenses(
    referenceid: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=500),
    search: str = Query(""),
    compliance_status: str | None = None,
    db: Session = Depends(get_db),
):
    return svc.get_licenses(db, referenceid, page=page, size=size, search=search,
                            compliance_status=compliance_status)


@router.post("", response_model=DataResponse[LicenseResponse], status_code=201)
def create_license(data: LicenseCreate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.create_license(db, data)}


@router.get("/{license_id}", response_model=DataResponse[LicenseResponse])
def get_license(license_id: int, db: Session = Depends(get_db)):
    return {"data": svc.get_license(db, license_id)}


@router.put("/{license_id}", response_model=DataResponse[LicenseResponse])
def update_license(license_id: int, data: LicenseUpdate, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.update_license(db, license_id, data)}


@router.delete("/{license_id}", response_model=DataResponse[LicenseResponse])
def delete_license(license_id: int, db: Session = Depends(get_db), _=Depends(require_session_user)):
    return {"data": svc.delete_license(db, license_id)}
