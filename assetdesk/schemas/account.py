from datetime import datetime, date
from pydantic import BaseModel, Field, field_validator
from assetdesk.schemas.common import FormModel, IdsRequest


class AccountBase(FormModel):
    referenceid: str = Field(..., min_length=1, max_length=64)
    tsm: str | None = None
    manager: str | None = None
    account_reference_number: str = Field(..., min_length=1, max_length=64)
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str | None = None
    contact_number: str | None = None
    email_address: str | None = None
    address: str | None = None
    region: str | None = None
    type_client: str | None = None
    next_available_date: date | None = None
    status: str = "Active"
    remarks: str | None = None


class AccountCreate(AccountBase):
    pass


class AccountUpdate(FormModel):
    tsm: str | None = None
    manager: str | None = None
    company_name: str | None = None
    contact_person: str | None = None
    contact_number: str | None = None
    email_address: str | None = None
    address: str | None = None
    region: str | None = None
    type_client: str | None = None
    next_available_date: date | None = None
    status: str | None = None
    remarks: str | None = None


class NextDateUpdate(BaseModel):
    next_available_date: date | None


class AccountRemoveRequest(IdsRequest):
    remarks: str = Field(..., min_length=1, max_length=2000)

    @field_validator("remarks", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class AccountTransferRequest(IdsRequest):
    new_referenceid: str = Field(..., min_length=1, max_length=64)


class AccountResponse(AccountBase):
    id: int
    date_created: datetime
    date_updated: datetime | None = None

    model_config = {"from_attributes": True}


class DuplicateCompany(BaseModel):
    company_name: str
    owner_referenceid: str


class DuplicateCheckResponse(BaseModel):
    exists: bool
    companies: list[DuplicateCompany]


class QueueResponse(BaseModel):
    due_today: dict[str, list[AccountResponse]]
    available: dict[str, list[AccountResponse]]
