import logging
import math
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException

from assetdesk.cache import cache, inventory_key, invalidate
from assetdesk.config import settings
from assetdesk.models.inventory import InventoryItem, AssetStatus
from assetdesk.realtime import feed
from assetdesk.schemas.common import Page
from assetdesk.schemas.inventory import InventoryCreate, InventoryUpdate, InventoryResponse
from assetdesk.services import dates
from assetdesk.services.asset_tag_service import next_asset_tag, validate_asset_tag

logger = logging.getLogger(__name__)

TABLE = "inventory"

_EXACT_FILTERS = ("location", "department", "brand", "model", "processor", "storage")


def serialize(item: InventoryItem) -> dict:
    return InventoryResponse.model_validate(item).model_dump(mode="json")


def _changed(item: InventoryItem, event_type: str) -> None:
    invalidate(inventory_key(item.referenceid))
    feed.publish(TABLE, event_type, serialize(item))


def get_inventory(
    db: Session,
    referenceid: str,
    page: int = 1,
    size: int = 50,
    status: str | None = None,
    asset_type: str | None = None,
    search: str = "",
    date_from: date | None = None,
    date_to: date | None = None,
    **filters,
) -> Page:
    query = select(InventoryItem).where(InventoryItem.referenceid == referenceid)
    if status:
        query = query.where(InventoryItem.status == status.strip().upper())
    if asset_type:
        query = query.where(InventoryItem.asset_type == asset_type.strip().upper())
    for name in _EXACT_FILTERS:
        value = filters.get(name)
        if value:
            query = query.where(getattr(InventoryItem, name) == value)
    if search:
        like = f"%{search}%"
        query = query.where(or_(
            InventoryItem.asset_tag.ilike(like),
            InventoryItem.serial_number.ilike(like),
            InventoryItem.new_user.ilike(like),
            InventoryItem.brand.ilike(like),
            InventoryItem.model.ilike(like),
        ))
    if date_from:
        query = query.where(InventoryItem.date_created >= datetime.combine(date_from, datetime.min.time()))
    if date_to:
        query = query.where(InventoryItem.date_created <= datetime.combine(date_to, datetime.max.time()))
    query = query.order_by(InventoryItem.date_created.desc(), InventoryItem.id.desc())

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    items = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(
        data=[InventoryResponse.model_validate(i) for i in items],
        total=total,
        page=page,
        pages=math.ceil(total / size) if total else 1,
        size=size,
    )


def inventory_snapshot(db: Session, referenceid: str) -> tuple[list[dict], bool]:
    """All rows of one owner as JSON dicts, served from the cache when warm.

    ``asset_age`` depends on the current day, so it is filled in on every
    read instead of being kept in the cached rows.
    """
    def load():
        items = db.scalars(
            select(InventoryItem)
            .where(InventoryItem.referenceid == referenceid)
            .order_by(InventoryItem.id)
        ).all()
        return [serialize(i) for i in items]

    rows, cached = cache.get_or_load(inventory_key(referenceid), load)
    today = dates.local_today(settings.APP_TIMEZONE)
    return [{**row, "asset_age": dates.asset_age(row["purchase_date"], today)} for row in rows], cached


def get_item(db: Session, item_id: int) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item


def get_item_by_tag(db: Session, asset_tag: str) -> InventoryItem | None:
    return db.scalar(select(InventoryItem).where(InventoryItem.asset_tag == asset_tag))


def create_item(db: Session, data: InventoryCreate) -> InventoryItem:
    payload = data.model_dump()
    if payload["warranty_date"] is None:
        payload["warranty_date"] = dates.warranty_date(payload["purchase_date"])

    if payload["asset_tag"]:
        validate_asset_tag(payload["asset_tag"], data.asset_type)
        if get_item_by_tag(db, payload["asset_tag"]):
            raise HTTPException(status_code=409, detail=f"Asset tag {payload['asset_tag']} already exists")
        item = InventoryItem(**payload)
        db.add(item)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=409, detail=f"Asset tag {payload['asset_tag']} already exists")
    elif data.asset_type:
        # Two writers can compute the same max+1; the unique index decides.
        for attempt in range(1, settings.ASSET_TAG_MAX_RETRIES + 1):
            payload["asset_tag"] = next_asset_tag(db, data.asset_type, dates.local_today(settings.APP_TIMEZONE).year)
            item = InventoryItem(**payload)
            db.add(item)
            try:
                db.commit()
                break
            except IntegrityError:
                db.rollback()
                logger.warning("Asset tag %s taken, retry %d", payload["asset_tag"], attempt)
        else:
            raise HTTPException(status_code=409, detail="Could not allocate a unique asset tag, try again")
    else:
        item = InventoryItem(**payload)
        db.add(item)
        db.commit()

    db.refresh(item)
    logger.info("Inventory item %s created (tag=%s)", item.id, item.asset_tag)
    _changed(item, "insert")
    return item


def update_item(db: Session, item_id: int, data: InventoryUpdate) -> InventoryItem:
    item = get_item(db, item_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("status") is None:
        update_data.pop("status", None)

    new_tag = update_data.get("asset_tag")
    tag = new_tag or item.asset_tag
    asset_type = update_data.get("asset_type") or item.asset_type
    # a type change must keep the tag prefix in line
    if tag and asset_type and (new_tag or "asset_type" in update_data):
        validate_asset_tag(tag, asset_type)
    if new_tag and new_tag != item.asset_tag and get_item_by_tag(db, new_tag):
        raise HTTPException(status_code=409, detail=f"Asset tag {new_tag} already exists")

    if "purchase_date" in update_data and "warranty_date" not in update_data:
        update_data["warranty_date"] = dates.warranty_date(update_data["purchase_date"])

    for field, value in update_data.items():
        setattr(item, field, value)
    item.date_updated = datetime.now(timezone.utc)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"Asset tag {new_tag} already exists")
    db.refresh(item)
    _changed(item, "update")
    return item


def delete_items(db: Session, ids: list[int]) -> int:
    items = db.scalars(select(InventoryItem).where(InventoryItem.id.in_(ids))).all()
    records = [serialize(i) for i in items]
    for item in items:
        # assignment rows keep their copy of the tag; the FK is nulled
        db.delete(item)
    db.commit()

    invalidate(*{inventory_key(r["referenceid"]) for r in records})
    for record in records:
        feed.publish(TABLE, "delete", record)
    logger.info("Deleted %d inventory item(s)", len(records))
    return len(records)


def change_status(db: Session, ids: list[int], new_status: AssetStatus) -> int:
    items = db.scalars(select(InventoryItem).where(InventoryItem.id.in_(ids))).all()
    now = datetime.now(timezone.utc)
    for item in items:
        item.status = new_status
        item.date_updated = now
    db.commit()
    for item in items:
        db.refresh(item)
        _changed(item, "update")
    logger.info("Status of %d item(s) set to %s", len(items), new_status.value)
    return len(items)


# ── Derived views ──────────────────────────────────────────────────────────
def warranty_view(db: Session, referenceid: str, today: date | None = None) -> list[dict]:
    rows, _ = inventory_snapshot(db, referenceid)
    result = []
    for row in rows:
        status, days = dates.warranty_info(row["warranty_date"], today)
        result.append({**row, "warranty_status": status, "warranty_days": days})
    return result


def disposal_view(db: Session, referenceid: str) -> list[dict]:
    rows, _ = inventory_snapshot(db, referenceid)
    return [row for row in rows if row["status"] == AssetStatus.DISPOSE.value]


def old_items(db: Session, referenceid: str, today: date | None = None, years: int | None = None) -> list[dict]:
    years = years or settings.OLD_ITEM_YEARS
    rows, _ = inventory_snapshot(db, referenceid)
    return [row for row in rows if dates.is_old_item(row["purchase_date"], row["status"], today, years)]
