"""
Bulk inventory import from an Excel workbook (.xlsx / .xlsm, openpyxl).

The first row holds column names. Every column must be an inventory field;
a single unknown column rejects the whole file. Rows default to status SPARE.
"""
import io
import logging
from decimal import Decimal, InvalidOperation
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select
from openpyxl import load_workbook, Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from assetdesk.cache import inventory_key, invalidate
from assetdesk.config import settings
from assetdesk.models.inventory import InventoryItem, AssetStatus
from assetdesk.realtime import feed
from assetdesk.services import dates
from assetdesk.services.asset_tag_service import (
    resolve_asset_type, prefix_for, next_tag_from_existing, validate_asset_tag,
)
from assetdesk.services.inventory_service import serialize

logger = logging.getLogger(__name__)

ALLOWED_FIELDS = [
    "asset_tag", "asset_type", "status", "location", "new_user", "old_user",
    "department", "position", "brand", "model", "processor", "ram", "storage",
    "serial_number", "purchase_date", "warranty_date", "asset_age", "amount",
    "remarks", "mac_address",
]

# derived on read, accepted in the file and ignored
_IGNORED_FIELDS = {"asset_age"}

_IMPORT_MAX_ROWS = 2000


def _normalize(s) -> str:
    """Header cell as a field name; a trailing * marks required columns in the template."""
    return str(s).lower().strip().rstrip("*").strip().replace(" ", "_")


def _parse_amount(value) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    s = str(value).replace("\xa0", "").replace(" ", "").replace(",", "").strip()
    if not s:
        return None
    try:
        return Decimal(s)
    except InvalidOperation:
        return None


def _text(value) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _parse_status(value) -> AssetStatus:
    if not _text(value):
        return AssetStatus.SPARE
    return AssetStatus(str(value).strip().upper())


def read_header(ws) -> list[str]:
    return [_normalize(c.value) if c.value is not None else "" for c in ws[1]]


def import_inventory_from_excel(db: Session, file_data: bytes, referenceid: str) -> dict:
    """
    Validate every row first, then insert the accepted ones in one commit.

    Returns a dict with success, imported, skipped, details (one entry per row)
    and, when success is False, error.
    """
    try:
        wb = load_workbook(filename=io.BytesIO(file_data), data_only=True)
    except Exception as e:
        return {"success": False, "error": f"Could not read file: {e}", "imported": 0, "skipped": 0, "details": []}

    ws = wb.active
    if ws.max_row < 1:
        return {"success": False, "error": "The file is empty", "imported": 0, "skipped": 0, "details": []}

    headers = read_header(ws)
    invalid = [h for h in headers if h and h not in ALLOWED_FIELDS]
    if invalid:
        return {
            "success": False,
            "error": f"Invalid column(s): {', '.join(invalid)}",
            "imported": 0, "skipped": 0, "details": [],
        }
    if not any(headers):
        return {"success": False, "error": "No header row found", "imported": 0, "skipped": 0, "details": []}

    data_rows = ws.max_row - 1
    if data_rows > _IMPORT_MAX_ROWS:
        return {
            "success": False,
            "error": f"Too many rows ({data_rows}). The maximum is {_IMPORT_MAX_ROWS}.",
            "imported": 0, "skipped": 0, "details": [],
        }

    # --- Phase 1: validate and prepare ---
    to_insert: list[dict] = []
    results: list[dict] = []
    used_tags: set[str] = set()
    existing_tags: dict[str, list[str]] = {}

    for row_num, row_values in enumerate(ws.iter_rows(min_row=2, values_only=True), 2):
        if all(v is None or (isinstance(v, str) and v.strip() == "") for v in row_values):
            continue
        raw = {
            h: row_values[i] if i < len(row_values) else None
            for i, h in enumerate(headers)
            if h and h not in _IGNORED_FIELDS
        }
        record = {k: _text(v) for k, v in raw.items()
                  if k not in ("status", "asset_type", "purchase_date", "warranty_date", "amount")}

        try:
            record["status"] = _parse_status(raw.get("status"))
            record["asset_type"] = resolve_asset_type(raw["asset_type"]) if _text(raw.get("asset_type")) else None
        except (ValueError, HTTPException):
            results.append({"row": row_num, "status": "skipped", "asset_tag": record.get("asset_tag"),
                            "reason": "Invalid status or asset_type"})
            continue

        record["purchase_date"] = dates.parse_date(raw.get("purchase_date"))
        record["warranty_date"] = (dates.parse_date(raw.get("warranty_date"))
                                   or dates.warranty_date(record["purchase_date"]))
        record["amount"] = _parse_amount(raw.get("amount"))
        record["referenceid"] = referenceid

        tag = record.get("asset_tag")
        if tag:
            try:
                validate_asset_tag(tag, record["asset_type"])
            except HTTPException as e:
                results.append({"row": row_num, "status": "skipped", "asset_tag": tag, "reason": e.detail})
                continue
            if tag in used_tags or db.scalar(select(InventoryItem.id).where(InventoryItem.asset_tag == tag)):
                results.append({"row": row_num, "status": "skipped", "asset_tag": tag,
                                "reason": f"Asset tag {tag} already exists or repeats in the file"})
                continue
        elif record["asset_type"]:
            prefix = prefix_for(record["asset_type"])
            year = dates.local_today(settings.APP_TIMEZONE).year
            if prefix not in existing_tags:
                existing_tags[prefix] = list(db.scalars(
                    select(InventoryItem.asset_tag).where(InventoryItem.asset_tag.like(f"{prefix}-{year}-%"))
                ).all())
            tag = next_tag_from_existing(prefix, year, existing_tags[prefix] + list(used_tags))
            record["asset_tag"] = tag

        if tag:
            used_tags.add(tag)
        to_insert.append(record)
        results.append({"row": row_num, "status": "imported", "asset_tag": tag, "reason": ""})

    # --- Phase 2: write ---
    items = [InventoryItem(**record) for record in to_insert]
    if items:
        db.add_all(items)
        db.commit()
        for item in items:
            db.refresh(item)
            feed.publish("inventory", "insert", serialize(item))
        invalidate(inventory_key(referenceid))

    skipped = len([r for r in results if r["status"] == "skipped"])
    logger.info("Import for %s: %d imported, %d skipped", referenceid, len(items), skipped)
    return {"success": True, "imported": len(items), "skipped": skipped, "details": results}


def generate_import_template() -> bytes:
    """Excel template with the accepted columns and one example row."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Inventory import"

    header_fill = PatternFill(start_color="1C2D42", end_color="1C2D42", fill_type="solid")
    header_font = Font(bold=True, color="F5A623", size=11)
    example_fill = PatternFill(start_color="EEF4FF", end_color="EEF4FF", fill_type="solid")

    for col, field in enumerate(ALLOWED_FIELDS, 1):
        cell = ws.cell(row=1, column=col, value=field)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")
        ws.column_dimensions[get_column_letter(col)].width = max(14, len(field) + 4)

    example = {
        "asset_type": "LAPTOP", "status": "SPARE", "location": "HQ 3F",
        "brand": "Dell", "model": "Latitude 5540", "processor": "i5-1345U",
        "ram": "16GB", "storage": "512GB", "serial_number": "SN-ABC123456",
        "purchase_date": "2024-01-15", "amount": 58990,
    }
    for col, field in enumerate(ALLOWED_FIELDS, 1):
        cell = ws.cell(row=2, column=col, value=example.get(field))
        cell.fill = example_fill

    ws.row_dimensions[1].height = 24
    ws.freeze_panes = "A2"

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
