"""Unit tests for the SQLAlchemy models."""
import pytest
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from assetdesk.models.user import User, ActivityLog
from assetdesk.models.inventory import InventoryItem, AssetType, AssetStatus
from assetdesk.models.license import License
from assetdesk.models.assigned_asset import AssignedAsset
from assetdesk.models.account import Account
from assetdesk.models.preference import Preference
from assetdesk.config import settings
from assetdesk.services.dates import local_today


def _user(email="a@a.com", reference_id="REF-A"):
    return User(
        email=email, hashed_password="x", firstname="Ann", lastname="Lee", reference_id=reference_id,
    )


# ─── User ────────────────────────────────────────────────────────────────────

def test_user_create(db):
    user = _user()
    db.add(user)
    db.commit()
    db.refresh(user)

    assert user.id is not None
    assert user.role == "user"
    assert user.is_active is True
    assert isinstance(user.created_at, datetime)


def test_user_unique_email(db):
    db.add(_user("same@same.com", "R1"))
    db.commit()
    db.add(_user("same@same.com", "R2"))
    with pytest.raises(IntegrityError):
        db.commit()


def test_user_unique_reference_id(db):
    db.add(_user("one@x.com", "R1"))
    db.commit()
    db.add(_user("two@x.com", "R1"))
    with pytest.raises(IntegrityError):
        db.commit()


def test_activity_log_belongs_to_user(db):
    user = _user()
    db.add(user)
    db.commit()
    db.add(ActivityLog(user_id=user.id, email=user.email, status="login", device_id="dev-1"))
    db.commit()
    db.refresh(user)
    assert [log.status for log in user.activity_logs] == ["login"]


# ─── Inventory ───────────────────────────────────────────────────────────────

def test_inventory_defaults(db):
    item = InventoryItem(referenceid="R1", asset_type=AssetType.LAPTOP, asset_tag="LAP-2026-001")
    db.add(item)
    db.commit()
    db.refresh(item)

    assert item.status == AssetStatus.SPARE
    assert item.date_updated is None
    assert item.asset_age is None


def test_inventory_asset_age_derived(db):
    item = InventoryItem(referenceid="R1", status=AssetStatus.SPARE, purchase_date=date(2020, 1, 1),
                         amount=Decimal("1200.50"))
    db.add(item)
    db.commit()
    assert item.asset_age.startswith(f"{local_today(settings.APP_TIMEZONE).year - 2020}y, ")
    assert item.amount == Decimal("1200.50")


def test_inventory_unique_asset_tag(db):
    db.add(InventoryItem(referenceid="R1", asset_tag="MON-2026-001", status=AssetStatus.SPARE))
    db.commit()
    db.add(InventoryItem(referenceid="R2", asset_tag="MON-2026-001", status=AssetStatus.SPARE))
    with pytest.raises(IntegrityError):
        db.commit()


def test_inventory_untagged_rows_do_not_collide(db):
    db.add(InventoryItem(referenceid="R1", status=AssetStatus.SPARE))
    db.add(InventoryItem(referenceid="R1", status=AssetStatus.SPARE))
    db.commit()
    assert db.query(InventoryItem).count() == 2


def test_assignment_links_inventory(db):
    item = InventoryItem(referenceid="R1", asset_tag="LAP-2026-001", status=AssetStatus.DEPLOYED)
    db.add(item)
    db.commit()
    row = AssignedAsset(
        assigned_number="ASN-20261018-1234", referenceid="R1", inventory_id=item.id,
        asset_tag=item.asset_tag, new_user="Ann", position="Dev", department="IT",
    )
    db.add(row)
    db.commit()
    db.refresh(item)
    assert item.assignments[0].assigned_number == "ASN-20261018-1234"
    assert row.status == "DEPLOYED"


# ─── License, Account, Preference ────────────────────────────────────────────

def test_license_asset_age(db):
    lic = License(referenceid="R1", software_name="Office", purchase_date=date(2024, 1, 1))
    db.add(lic)
    db.commit()
    assert lic.asset_age.endswith("d")


def test_account_defaults_active(db):
    acc = Account(referenceid="R1", account_reference_number="ACC-1", company_name="Acme")
    db.add(acc)
    db.commit()
    assert acc.status == "Active"
    assert acc.next_available_date is None


def test_preference_unique_per_user_and_key(db):
    user = _user()
    db.add(user)
    db.commit()
    db.add(Preference(user_id=user.id, key="sidebarOpenSections", value={"inventory": True}))
    db.commit()
    db.add(Preference(user_id=user.id, key="sidebarOpenSections", value={}))
    with pytest.raises(IntegrityError):
        db.commit()
