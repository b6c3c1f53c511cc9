import math
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from fastapi import HTTPException
from assetdesk.models.license import License
from assetdesk.realtime import feed
from assetdesk.schemas.common import Page
from assetdesk.schemas.license import LicenseCreate, LicenseUpdate, LicenseResponse

TABLE = "licenses"


def _fill_remaining(data: dict, current: License | None = None) -> None:
    """remaining = purchased - installed, unless the caller set it."""
    if data.get("remaining") is not None:
        return
    total = data.get("total_purchased", current.total_purchased if current else None)
    installed = data.get("managed_installation", current.managed_installation if current else None)
    if total is not None and installed is not None:
        data["remaining"] = total - installed


def _publish(lic: License, event_type: str) -> None:
    feed.publish(TABLE, event_type, LicenseResponse.model_validate(lic).model_dump(mode="json"))


def get_licenses(
    db: Session,
    referenceid: str,
    page: int = 1,
    size: int = 50,
    search: str = "",
    compliance_status: str | None = None,
) -> Page:
    query = select(License).where(License.referenceid == referenceid)
    if search:
        query = query.where(or_(
            License.software_name.ilike(f"%{search}%"),
            License.software_version.ilike(f"%{search}%"),
        ))
    if compliance_status:
        query = query.where(License.compliance_status == compliance_status)
    query = query.order_by(License.date_created.desc(), License.id.desc())
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(
        data=[LicenseResponse.model_validate(r) for r in rows],
        total=total,
        page=page,
        pages=math.ceil(total / size) if total else 1,
        size=size,
    )


def get_license(db: Session, license_id: int) -> License:
    lic = db.get(License, license_id)
    if not lic:
        raise HTTPException(status_code=404, detail="License not found")
    return lic


def create_license(db: Session, data: LicenseCreate) -> License:
    payload = data.model_dump()
    _fill_remaining(payload)
    lic = License(**payload)
    db.add(lic)
    db.commit()
    db.refresh(lic)
    _publish(lic, "insert")
    return lic


def update_license(db: Session, license_id: int, data: LicenseUpdate) -> License:
    lic = get_license(db, license_id)
    update_data = data.model_dump(exclude_unset=True)
    if {"total_purchased", "managed_installation"} & update_data.keys():
        _fill_remaining(update_data, lic)
    for field, value in update_data.items():
        setattr(lic, field, value)
    db.commit()
    db.refresh(lic)
    _publish(lic, "update")
    return lic


def delete_license(db: Session, license_id: int) -> dict:
    lic = get_license(db, license_id)
    record = LicenseResponse.model_validate(lic).model_dump(mode="json")
    db.delete(lic)
    db.commit()
    feed.publish(TABLE, "delete", record)
    return record
