from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field
from assetdesk.schemas.common import FormModel, IdsRequest
from assetdesk.schemas.account import AccountResponse


# ── Activities ─────────────────────────────────────────────────────────────
class ActivityCreate(FormModel):
    referenceid: str = Field(..., min_length=1)
    tsm: str = Field(..., min_length=1)
    manager: str = Field(..., min_length=1)
    account_reference_number: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    activity_reference_number: str = Field(..., min_length=1)


class ActivityUpdate(FormModel):
    status: str | None = None
    tsm: str | None = None
    manager: str | None = None


class ActivityResponse(BaseModel):
    id: int
    referenceid: str
    tsm: str
    manager: str
    account_reference_number: str
    activity_reference_number: str
    status: str
    date_created: datetime
    date_updated: datetime

    model_config = {"from_attributes": True}


class QueuedActivityResponse(BaseModel):
    activity: ActivityResponse
    account: AccountResponse


# ── History ────────────────────────────────────────────────────────────────
class HistoryFields(FormModel):
    referenceid: str | None = None
    tsm: str | None = None
    manager: str | None = None
    target_quota: str | None = None
    type_client: str | None = None
    source: str | None = None
    callback: datetime | None = None
    call_status: str | None = None
    call_type: str | None = None
    product_category: str | None = None
    project_type: str | None = None
    project_name: str | None = None
    quotation_number: str | None = None
    quotation_amount: Decimal | None = None
    so_number: str | None = None
    so_amount: Decimal | None = None
    dr_number: str | None = None
    actual_sales: Decimal | None = None
    payment_terms: str | None = None
    delivery_date: date | None = None
    date_followup: date | None = None
    scheduled_status: str | None = None
    remarks: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class HistoryCreate(HistoryFields):
    activity_reference_number: str = Field(..., min_length=1)
    account_reference_number: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    type_activity: str = Field(..., min_length=1)


class HistoryUpdate(HistoryFields):
    status: str | None = None
    type_activity: str | None = None


class HistoryResponse(HistoryFields):
    id: int
    activity_reference_number: str
    account_reference_number: str
    status: str
    type_activity: str
    date_created: datetime
    date_updated: datetime

    model_config = {"from_attributes": True}


class HistoryDeleteRequest(IdsRequest):
    remarks: str | None = None


class CompletedHistoryResponse(HistoryResponse):
    company_name: str
    contact_number: str
    type_client: str | None = None


class ScheduledHistoryResponse(BaseModel):
    callbacks: list[HistoryResponse]
    followups: list[HistoryResponse]
