"""
Asset deployment batches.

One request hands several inventory items to one person. Every row of the
batch shares an ``ASN-YYYYMMDD-NNNN`` number, and the referenced inventory
items switch to DEPLOYED in the same transaction.
"""
import logging
import random
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException

from assetdesk.cache import inventory_key, invalidate
from assetdesk.models.assigned_asset import AssignedAsset
from assetdesk.models.inventory import InventoryItem, AssetStatus
from assetdesk.realtime import feed
from assetdesk.schemas.assignment import AssignRequest, AssignUpdate, AssignedAssetResponse
from assetdesk.services.inventory_service import serialize as serialize_item

logger = logging.getLogger(__name__)

TABLE = "assigned_assets"


def generate_assigned_number(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"ASN-{now:%Y%m%d}-{random.randint(1000, 9999)}"


def _record(row: AssignedAsset) -> dict:
    return AssignedAssetResponse.model_validate(row).model_dump(mode="json")


def assign_assets(db: Session, data: AssignRequest) -> dict:
    ids = [i.inventory_id for i in data.items]
    inventory = {
        item.id: item
        for item in db.scalars(select(InventoryItem).where(InventoryItem.id.in_(ids))).all()
    }
    missing = sorted(set(ids) - inventory.keys())
    if missing:
        raise HTTPException(status_code=404, detail=f"Inventory item(s) not found: {missing}")

    assigned_number = generate_assigned_number()
    while db.scalar(select(AssignedAsset.id).where(AssignedAsset.assigned_number == assigned_number)):
        assigned_number = generate_assigned_number()

    rows = []
    now = datetime.now(timezone.utc)
    for entry in data.items:
        item = inventory[entry.inventory_id]
        row = AssignedAsset(
            assigned_number=assigned_number,
            referenceid=data.referenceid,
            inventory_id=item.id,
            asset_tag=entry.asset_tag or item.asset_tag,
            asset_type=entry.asset_type or (item.asset_type.value if item.asset_type else None),
            brand=entry.brand or item.brand,
            model=entry.model or item.model,
            serial_number=entry.serial_number or item.serial_number,
            remarks=data.remarks,
            new_user=data.new_user,
            old_user=data.old_user,
            position=data.position,
            department=data.department,
            status=AssetStatus.DEPLOYED.value,
        )
        db.add(row)
        rows.append(row)
        item.status = AssetStatus.DEPLOYED
        item.new_user = data.new_user
        item.old_user = data.old_user
        item.date_updated = now

    db.commit()
    for row in rows:
        db.refresh(row)
        feed.publish(TABLE, "insert", _record(row))
    for item in inventory.values():
        db.refresh(item)
        feed.publish("inventory", "update", serialize_item(item))
    invalidate(*{inventory_key(i.referenceid) for i in inventory.values()})

    logger.info("Assignment %s: %d item(s) deployed to %s", assigned_number, len(rows), data.new_user)
    return {"success": True, "assigned_number": assigned_number, "count": len(rows)}


def get_assigned_assets(db: Session, referenceid: str) -> list[AssignedAsset]:
    return db.scalars(
        select(AssignedAsset)
        .where(AssignedAsset.referenceid == referenceid)
        .order_by(AssignedAsset.date_created.desc(), AssignedAsset.id.desc())
    ).all()


def get_batch(db: Session, assigned_number: str) -> list[AssignedAsset]:
    rows = db.scalars(
        select(AssignedAsset)
        .where(AssignedAsset.assigned_number == assigned_number)
        .order_by(AssignedAsset.id)
    ).all()
    if not rows:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return rows


def get_assigned_asset(db: Session, row_id: int) -> AssignedAsset:
    row = db.get(AssignedAsset, row_id)
    if not row:
        raise HTTPException(status_code=404, detail="Assigned asset not found")
    return row


def update_assigned_asset(db: Session, row_id: int, data: AssignUpdate) -> AssignedAsset:
    row = get_assigned_asset(db, row_id)
    for field, value in data.model_dump().items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    feed.publish(TABLE, "update", _record(row))
    return row


def delete_assigned_asset(db: Session, row_id: int) -> dict:
    row = get_assigned_asset(db, row_id)
    record = _record(row)
    db.delete(row)
    db.commit()
    feed.publish(TABLE, "delete", record)
    return record
