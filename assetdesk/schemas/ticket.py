from datetime import datetime
from pydantic import BaseModel, Field
from assetdesk.schemas.common import FormModel


class EndorsedTicketCreate(FormModel):
    account_reference_number: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    contact_person: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=1)
    email_address: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    ticket_reference_number: str = Field(..., min_length=1)
    wrap_up: str = Field(..., min_length=1)
    inquiry: str = Field(..., min_length=1)
    manager: str = Field(..., min_length=1)
    agent: str = Field(..., min_length=1)


class EndorsedTicketResponse(EndorsedTicketCreate):
    id: int
    date_created: datetime
    date_updated: datetime

    model_config = {"from_attributes": True}
