from datetime import datetime
from pydantic import BaseModel, Field, model_validator
from assetdesk.schemas.common import FormModel


class MeetingCreate(FormModel):
    referenceid: str = Field(..., min_length=1)
    tsm: str | None = None
    manager: str | None = None
    type_activity: str = Field(..., min_length=1)
    remarks: str | None = None
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MeetingResponse(BaseModel):
    id: int
    referenceid: str
    tsm: str | None
    manager: str | None
    type_activity: str
    remarks: str | None
    start_date: datetime
    end_date: datetime
    date_created: datetime

    model_config = {"from_attributes": True}


class ReminderResponse(BaseModel):
    meeting: MeetingResponse | None = None
    logout_due: bool = False
