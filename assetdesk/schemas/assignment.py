from datetime import datetime
from pydantic import BaseModel, Field
from assetdesk.schemas.common import FormModel


class AssignItem(BaseModel):
    inventory_id: int
    asset_tag: str | None = None
    asset_type: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None


class AssignRequest(FormModel):
    referenceid: str = Field(..., min_length=1)
    new_user: str = Field(..., min_length=1)
    old_user: str | None = None
    position: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    remarks: str | None = None
    items: list[AssignItem] = Field(..., min_length=1)


class AssignUpdate(FormModel):
    new_user: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)


class AssignResult(BaseModel):
    success: bool = True
    assigned_number: str
    count: int


class AssignedAssetResponse(BaseModel):
    id: int
    assigned_number: str
    referenceid: str
    inventory_id: int | None
    asset_tag: str | None
    asset_type: str | None
    brand: str | None
    model: str | None
    serial_number: str | None
    remarks: str | None
    new_user: str
    old_user: str | None
    position: str
    department: str
    status: str
    date_created: datetime

    model_config = {"from_attributes": True}
