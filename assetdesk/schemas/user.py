from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: str = "user"
    firstname: str = Field(..., min_length=1, max_length=128)
    lastname: str = Field(..., min_length=1, max_length=128)
    reference_id: str = Field(..., min_length=1, max_length=64)
    profile_picture: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    device_id: str | None = None


class UserResponse(BaseModel):
    id: int
    email: str
    role: str
    firstname: str
    lastname: str
    reference_id: str
    profile_picture: str | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserDirectoryEntry(BaseModel):
    firstname: str
    lastname: str
    reference_id: str
    profile_picture: str | None = None

    model_config = {"from_attributes": True}


class ActivityLogResponse(BaseModel):
    id: int
    email: str
    reference_id: str | None
    status: str
    device_id: str | None
    ip_address: str | None
    timestamp: datetime

    model_config = {"from_attributes": True}
