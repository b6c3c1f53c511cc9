"""
Call-scheduling queue.

Accounts are bucketed by their ``type_client`` tier into two views: accounts
due today (``next_available_date`` is today) and accounts never scheduled
(``next_available_date`` is empty). Accounts with status "pending" are left
out of both. Adding an account to today's queue opens an On-Progress activity
and pushes the account's next available date out by the tier's cadence.
"""
import logging
import time
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException

from assetdesk.cache import activity_key, invalidate
from assetdesk.config import settings
from assetdesk.models.account import Account
from assetdesk.models.activity import Activity
from assetdesk.realtime import feed
from assetdesk.schemas.account import AccountResponse
from assetdesk.schemas.activity import ActivityResponse
from assetdesk.services.dates import add_months, parse_date

logger = logging.getLogger(__name__)

TOP_TIER = "TOP 50"

CLUSTER_ORDER = ["TOP 50", "NEXT 30", "BALANCE 20", "TSA CLIENT", "CSR CLIENT"]
CLUSTER_ORDER_UNSCHEDULED = ["TOP 50", "BALANCE 20", "NEXT 30", "TSA CLIENT", "CSR CLIENT"]

TOP_TIER_CADENCE_DAYS = 15
DEFAULT_REGION = "NCR"


def normalize_date(value, tz_name: str | None = None) -> str | None:
    """``YYYY-MM-DD`` of ``value`` in local time, or None when absent/unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            value = parse_date(value)
            if value is None:
                return None
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(tz_name or settings.APP_TIMEZONE))
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _field(account, name):
    if isinstance(account, dict):
        return account.get(name)
    return getattr(account, name, None)


def _is_pending(account) -> bool:
    return str(_field(account, "status") or "").lower() == "pending"


def group_by_cluster(accounts, clusters: list[str], condition, tz_name: str | None = None) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for cluster in clusters:
        grouped[cluster] = [
            acc for acc in accounts
            if _field(acc, "type_client") == cluster
            and condition(normalize_date(_field(acc, "next_available_date"), tz_name))
            and not _is_pending(acc)
        ]
    return grouped


def partition_accounts(accounts, today: date, tz_name: str | None = None) -> dict:
    today_key = today.isoformat()
    accounts = list(accounts)
    return {
        "due_today": group_by_cluster(accounts, CLUSTER_ORDER, lambda d: d == today_key, tz_name),
        "available": group_by_cluster(accounts, CLUSTER_ORDER_UNSCHEDULED, lambda d: d is None, tz_name),
    }


def next_available_date(type_client: str | None, today: date) -> date:
    if type_client == TOP_TIER:
        return today + timedelta(days=TOP_TIER_CADENCE_DAYS)
    return add_months(today, 1)


def generate_activity_reference(company_name: str, region: str | None) -> str:
    words = (company_name or "").strip().split()
    first = words[0][0].upper() if words else "X"
    last = words[-1][0].upper() if words else "X"
    tail = str(time.time_ns() // 1_000_000)[-10:]
    return f"{first}{last}-{region or DEFAULT_REGION}-{tail}"


def get_queue(db: Session, referenceid: str, today: date) -> dict:
    accounts = db.scalars(select(Account).where(Account.referenceid == referenceid)).all()
    return partition_accounts(accounts, today)


def enqueue_account(db: Session, account_id: int, referenceid: str, today: date) -> dict:
    account = db.get(Account, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    if not account.tsm or not account.manager:
        raise HTTPException(status_code=400, detail="TSM or manager information is missing on the account")

    activity_ref = generate_activity_reference(account.company_name, account.region)
    while db.scalar(select(Activity.id).where(Activity.activity_reference_number == activity_ref)):
        activity_ref = generate_activity_reference(account.company_name, account.region)

    activity = Activity(
        referenceid=referenceid,
        tsm=account.tsm,
        manager=account.manager,
        account_reference_number=account.account_reference_number,
        status="On-Progress",
        activity_reference_number=activity_ref,
    )
    db.add(activity)
    account.next_available_date = next_available_date(account.type_client, today)
    db.commit()
    db.refresh(activity)
    db.refresh(account)
    invalidate(activity_key(referenceid))
    feed.publish("activities", "insert", ActivityResponse.model_validate(activity).model_dump(mode="json"))
    feed.publish("accounts", "update", AccountResponse.model_validate(account).model_dump(mode="json"))
    logger.info(
        "Account %s queued, next available %s",
        account.account_reference_number, account.next_available_date,
    )
    return {"activity": activity, "account": account}
