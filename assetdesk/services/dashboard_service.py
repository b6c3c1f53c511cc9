from sqlalchemy.orm import Session
from assetdesk.models.inventory import AssetStatus, AssetType
from assetdesk.services.inventory_service import inventory_snapshot


def summarize(rows: list[dict]) -> dict:
    status = {s.value.lower(): 0 for s in AssetStatus}
    asset_type = {t.value.lower(): 0 for t in AssetType}
    for row in rows:
        if row.get("status"):
            key = str(row["status"]).lower()
            status[key] = status.get(key, 0) + 1
        if row.get("asset_type"):
            key = str(row["asset_type"]).lower()
            asset_type[key] = asset_type.get(key, 0) + 1
    return {"status": status, "asset_type": asset_type, "total": len(rows)}


def get_dashboard(db: Session, referenceid: str) -> dict:
    rows, _ = inventory_snapshot(db, referenceid)
    return summarize(rows)
