from assetdesk.models.user import User, ActivityLog
from assetdesk.models.inventory import InventoryItem, AssetType, AssetStatus
from assetdesk.models.license import License
from assetdesk.models.assigned_asset import AssignedAsset
from assetdesk.models.account import Account
from assetdesk.models.activity import Activity, History
from assetdesk.models.meeting import Meeting
from assetdesk.models.ticket import EndorsedTicket
from assetdesk.models.preference import Preference

__all__ = [
    "User", "ActivityLog", "InventoryItem", "AssetType", "AssetStatus", "License",
    "AssignedAsset", "Account", "Activity", "History", "Meeting", "EndorsedTicket", "Preference",
]
