from typing import TypeVar, Generic
from pydantic import BaseModel, model_validator

T = TypeVar("T")


class FormModel(BaseModel):
    """Request body where an empty string means "not provided"."""

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data):
        if isinstance(data, dict):
            return {k: (None if isinstance(v, str) and v.strip() == "" else v) for k, v in data.items()}
        return data


class DataResponse(BaseModel, Generic[T]):
    data: T


class CachedResponse(DataResponse[T], Generic[T]):
    cached: bool = False


class Page(BaseModel, Generic[T]):
    data: list[T]
    total: int
    page: int
    pages: int
    size: int


class IdsRequest(BaseModel):
    ids: list[int]

    @model_validator(mode="after")
    def _non_empty(self):
        if not self.ids:
            raise ValueError("No IDs provided")
        return self
