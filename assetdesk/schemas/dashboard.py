from pydantic import BaseModel


class DashboardResponse(BaseModel):
    status: dict[str, int]
    asset_type: dict[str, int]
    total: int
