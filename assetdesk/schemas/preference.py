from typing import Any
from pydantic import BaseModel


class PreferenceValue(BaseModel):
    value: Any = None


class PreferenceResponse(BaseModel):
    key: str
    value: Any = None
