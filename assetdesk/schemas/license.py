from datetime import datetime, date
from pydantic import Field
from assetdesk.schemas.common import FormModel


class LicenseBase(FormModel):
    referenceid: str = Field(..., min_length=1, max_length=64)
    software_name: str | None = None
    software_version: str | None = None
    total_purchased: int | None = Field(None, ge=0)
    managed_installation: int | None = Field(None, ge=0)
    remaining: int | None = None
    compliance_status: str | None = None
    action: str | None = None
    purchase_date: date | None = None
    remarks: str | None = None


class LicenseCreate(LicenseBase):
    pass


class LicenseUpdate(FormModel):
    software_name: str | None = None
    software_version: str | None = None
    total_purchased: int | None = Field(None, ge=0)
    managed_installation: int | None = Field(None, ge=0)
    remaining: int | None = None
    compliance_status: str | None = None
    action: str | None = None
    purchase_date: date | None = None
    remarks: str | None = None


class LicenseResponse(LicenseBase):
    id: int
    asset_age: str | None = None
    date_created: datetime
    date_updated: datetime | None = None

    model_config = {"from_attributes": True}
