from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session
from assetdesk.config import settings
from assetdesk.database import get_db
from assetdesk.routers.auth import require_session_user
from assetdesk.services.dates import local_today
import assetdesk.services.export_service as svc
import assetdesk.services.import_service as import_svc

router = APIRouter(prefix="/api", tags=["export"])

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_MAX_UPLOAD = 10 * 1024 * 1024


@router.get("/export/inventory")
def export_inventory(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    xlsx_bytes = svc.export_inventory_excel(db, referenceid)
    return Response(
        content=xlsx_bytes,
        media_type=XLSX,
        headers={"Content-Disposition": "attachment; filename=inventory.xlsx"},
    )


@router.get("/export/warranty")
def export_warranty(referenceid: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    xlsx_bytes = svc.export_warranty_excel(db, referenceid, local_today(settings.APP_TIMEZONE))
    return Response(
        content=xlsx_bytes,
        media_type=XLSX,
        headers={"Content-Disposition": "attachment; filename=warranty.xlsx"},
    )


@router.get("/export/assignment/{assigned_number}")
def export_assignment_pdf(assigned_number: str, db: Session = Depends(get_db)):
    pdf_bytes = svc.export_assignment_pdf(db, assigned_number)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={assigned_number}.pdf"},
    )


@router.get("/import/template")
def download_import_template():
    xlsx_bytes = import_svc.generate_import_template()
    return Response(
        content=xlsx_bytes,
        media_type=XLSX,
        headers={"Content-Disposition": "attachment; filename=assetdesk-import-template.xlsx"},
    )


@router.post("/import/inventory")
def import_inventory(
    request: Request,
    file: UploadFile = File(...),
    referenceid: str = Form(..., min_length=1),
    db: Session = Depends(get_db),
    _=Depends(require_session_user),
):
    if not file.filename or not file.filename.lower().endswith((".xlsx", ".xlsm")):
        raise HTTPException(status_code=400, detail="Unsupported file type, upload .xlsx or .xlsm")

    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > _MAX_UPLOAD:
        raise HTTPException(status_code=413, detail="File is too large, the limit is 10 MB")
    file_data = file.file.read()
    if len(file_data) > _MAX_UPLOAD:
        raise HTTPException(status_code=413, detail="File is too large, the limit is 10 MB")

    result = import_svc.import_inventory_from_excel(db, file_data, referenceid)
    if not result["success"]:
        raise HTTPException(status_code=400, detail=result["error"])
    return {"data": result}
