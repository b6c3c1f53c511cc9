from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from assetdesk.models.inventory import AssetType, AssetStatus
from assetdesk.schemas.common import FormModel, IdsRequest


def _upper(value):
    return value.strip().upper() if isinstance(value, str) else value


class InventoryBase(FormModel):
    referenceid: str = Field(..., min_length=1, max_length=64)
    asset_tag: str | None = Field(None, max_length=32)
    asset_type: AssetType | None = None
    status: AssetStatus
    location: str | None = None
    new_user: str | None = None
    old_user: str | None = None
    department: str | None = None
    position: str | None = None
    brand: str | None = None
    model: str | None = None
    processor: str | None = None
    ram: str | None = None
    storage: str | None = None
    serial_number: str | None = None
    mac_address: str | None = None
    purchase_date: date | None = None
    warranty_date: date | None = None
    amount: Decimal | None = None
    remarks: str | None = None

    @field_validator("asset_type", "status", mode="before")
    @classmethod
    def _normalize_enums(cls, v):
        return _upper(v)


class InventoryCreate(InventoryBase):
    pass


class InventoryUpdate(FormModel):
    asset_tag: str | None = None
    asset_type: AssetType | None = None
    status: AssetStatus | None = None
    location: str | None = None
    new_user: str | None = None
    old_user: str | None = None
    department: str | None = None
    position: str | None = None
    brand: str | None = None
    model: str | None = None
    processor: str | None = None
    ram: str | None = None
    storage: str | None = None
    serial_number: str | None = None
    mac_address: str | None = None
    purchase_date: date | None = None
    warranty_date: date | None = None
    amount: Decimal | None = None
    remarks: str | None = None

    @field_validator("asset_type", "status", mode="before")
    @classmethod
    def _normalize_enums(cls, v):
        return _upper(v)


class InventoryResponse(InventoryBase):
    id: int
    asset_age: str | None = None
    date_created: datetime
    date_updated: datetime | None = None

    model_config = {"from_attributes": True}


class WarrantyResponse(InventoryResponse):
    warranty_status: str
    warranty_days: int | None = None


class StatusChangeRequest(IdsRequest):
    new_status: AssetStatus

    @field_validator("new_status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        return _upper(v)


class AssetTagResponse(BaseModel):
    asset_tag: str
