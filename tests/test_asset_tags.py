"""Unit tests for the asset tag sequencer."""
import pytest
from datetime import date
from fastapi import HTTPException

from assetdesk.models.inventory import InventoryItem, AssetType, AssetStatus
from assetdesk.services import asset_tag_service as tags


def test_first_tag_of_year():
    assert tags.next_tag_from_existing("LAP", 2026, []) == "LAP-2026-001"


def test_max_plus_one_never_gap_fills():
    existing = ["LAP-2026-001", "LAP-2026-003"]
    assert tags.next_tag_from_existing("LAP", 2026, existing) == "LAP-2026-004"


def test_ignores_other_years_and_malformed():
    existing = ["LAP-2025-050", "LAP-2026-1", "LAP-2026-ABC", None, "MON-2026-009", "LAP-2026-002"]
    assert tags.next_tag_from_existing("LAP", 2026, existing) == "LAP-2026-003"


def test_prefix_is_case_insensitive():
    assert tags.prefix_for("Laptop") == "LAP"
    assert tags.prefix_for("monitor") == "MON"
    assert tags.prefix_for(AssetType.DESKTOP) == "DES"


def test_invalid_type_rejected():
    with pytest.raises(HTTPException) as exc:
        tags.prefix_for("PRINTER")
    assert exc.value.status_code == 400
    with pytest.raises(HTTPException):
        tags.prefix_for(None)


def test_validate_tag_format():
    tags.validate_asset_tag("LAP-2026-001", "LAPTOP")
    for bad in ("MON-2026-001", "LAP-26-001", "LAP-2026-01", "LAP-2026-0001"):
        with pytest.raises(HTTPException) as exc:
            tags.validate_asset_tag(bad, "LAPTOP")
        assert exc.value.status_code == 400


def test_next_asset_tag_reads_database(db):
    for tag in ("MON-2026-001", "MON-2026-007", "LAP-2026-010"):
        db.add(InventoryItem(referenceid="R1", asset_tag=tag, status=AssetStatus.SPARE))
    db.commit()
    assert tags.next_asset_tag(db, "MONITOR", 2026) == "MON-2026-008"
    assert tags.next_asset_tag(db, "DESKTOP", 2026) == "DES-2026-001"


def test_next_asset_tag_defaults_to_current_year(db):
    assert tags.next_asset_tag(db, "LAPTOP") == f"LAP-{date.today().year}-001"
