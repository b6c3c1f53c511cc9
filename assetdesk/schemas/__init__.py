from assetdesk.schemas.common import DataResponse, CachedResponse, Page, IdsRequest
from assetdesk.schemas.inventory import (
    InventoryCreate, InventoryUpdate, InventoryResponse, WarrantyResponse, StatusChangeRequest,
)
from assetdesk.schemas.license import LicenseCreate, LicenseUpdate, LicenseResponse
from assetdesk.schemas.assignment import AssignRequest, AssignUpdate, AssignedAssetResponse
from assetdesk.schemas.account import AccountCreate, AccountUpdate, AccountResponse
from assetdesk.schemas.activity import (
    ActivityCreate, ActivityUpdate, ActivityResponse, HistoryCreate, HistoryUpdate, HistoryResponse,
)
from assetdesk.schemas.meeting import MeetingCreate, MeetingResponse
from assetdesk.schemas.ticket import EndorsedTicketCreate, EndorsedTicketResponse
from assetdesk.schemas.user import UserRegister, LoginRequest, UserResponse

__all__ = [
    "DataResponse", "CachedResponse", "Page", "IdsRequest",
    "InventoryCreate", "InventoryUpdate", "InventoryResponse", "WarrantyResponse", "StatusChangeRequest",
    "LicenseCreate", "LicenseUpdate", "LicenseResponse",
    "AssignRequest", "AssignUpdate", "AssignedAssetResponse",
    "AccountCreate", "AccountUpdate", "AccountResponse",
    "ActivityCreate", "ActivityUpdate", "ActivityResponse", "HistoryCreate", "HistoryUpdate", "HistoryResponse",
    "MeetingCreate", "MeetingResponse",
    "EndorsedTicketCreate", "EndorsedTicketResponse",
    "UserRegister", "LoginRequest", "UserResponse",
]
