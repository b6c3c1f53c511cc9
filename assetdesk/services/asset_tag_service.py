import re
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException
from assetdesk.models.inventory import InventoryItem, AssetType

PREFIXES = {
    AssetType.LAPTOP: "LAP",
    AssetType.MONITOR: "MON",
    AssetType.DESKTOP: "DES",
}


def resolve_asset_type(value) -> AssetType:
    """Accepts LAPTOP, Laptop, laptop or an AssetType member."""
    if isinstance(value, AssetType):
        return value
    try:
        return AssetType(str(value or "").strip().upper())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid or missing asset_type")


def prefix_for(asset_type) -> str:
    return PREFIXES[resolve_asset_type(asset_type)]


def next_tag_from_existing(prefix: str, year: int, tags) -> str:
    pattern = re.compile(rf"^{re.escape(prefix)}-{year}-(\d{{3}})$")
    seqs = [int(m.group(1)) for m in (pattern.match(t or "") for t in tags) if m]
    next_seq = max(seqs, default=0) + 1
    return f"{prefix}-{year}-{next_seq:03d}"


def next_asset_tag(db: Session, asset_type, year: int | None = None) -> str:
    prefix = prefix_for(asset_type)
    year = year or date.today().year
    tags = db.scalars(
        select(InventoryItem.asset_tag).where(InventoryItem.asset_tag.like(f"{prefix}-{year}-%"))
    ).all()
    return next_tag_from_existing(prefix, year, tags)


def validate_asset_tag(tag: str, asset_type) -> None:
    prefix = prefix_for(asset_type)
    if not re.fullmatch(rf"{prefix}-\d{{4}}-\d{{3}}", tag):
        raise HTTPException(
            status_code=400,
            detail=f"asset_tag '{tag}' must have the format {prefix}-YYYY-NNN",
        )
