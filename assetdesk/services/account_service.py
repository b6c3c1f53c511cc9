import logging
import re
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException
from assetdesk.models.account import Account
from assetdesk.realtime import feed
from assetdesk.schemas.account import AccountCreate, AccountUpdate, AccountResponse

logger = logging.getLogger(__name__)

TABLE = "accounts"

REMOVED = "Removed"
TRANSFERRED = "Transferred"
DUPLICATE_MAX_DISTANCE = 2


def _publish(account: Account, event_type: str) -> None:
    feed.publish(TABLE, event_type, AccountResponse.model_validate(account).model_dump(mode="json"))


def get_accounts(db: Session, referenceid: str, type_client: str | None = None) -> list[Account]:
    query = select(Account).where(Account.referenceid == referenceid)
    if type_client:
        query = query.where(Account.type_client == type_client)
    return db.scalars(query.order_by(Account.company_name)).all()


def get_account(db: Session, account_id: int) -> Account:
    account = db.get(Account, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


def get_account_by_reference(db: Session, account_reference_number: str) -> Account | None:
    return db.scalar(select(Account).where(Account.account_reference_number == account_reference_number))


def create_account(db: Session, data: AccountCreate) -> Account:
    if get_account_by_reference(db, data.account_reference_number):
        raise HTTPException(status_code=409, detail="Account reference number already exists")
    account = Account(**data.model_dump())
    db.add(account)
    db.commit()
    db.refresh(account)
    _publish(account, "insert")
    return account


def update_account(db: Session, account_id: int, data: AccountUpdate) -> Account:
    account = get_account(db, account_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "status" and value is None:
            continue
        setattr(account, field, value)
    db.commit()
    db.refresh(account)
    _publish(account, "update")
    return account


def set_next_available_date(db: Session, account_id: int, value: date | None) -> Account:
    account = get_account(db, account_id)
    account.next_available_date = value
    db.commit()
    db.refresh(account)
    _publish(account, "update")
    return account


# ── Bulk status changes ────────────────────────────────────────────────────
def _bulk_update(db: Session, ids: list[int], **fields) -> list[Account]:
    accounts = db.scalars(select(Account).where(Account.id.in_(ids))).all()
    for account in accounts:
        for field, value in fields.items():
            setattr(account, field, value)
    db.commit()
    for account in accounts:
        db.refresh(account)
        _publish(account, "update")
    return accounts


def remove_accounts(db: Session, ids: list[int], remarks: str) -> int:
    """Mark accounts as removed. They stay in the table pending the manager's approval."""
    accounts = _bulk_update(db, ids, status=REMOVED, remarks=remarks)
    logger.info("Removed %d account(s)", len(accounts))
    return len(accounts)


def transfer_accounts(db: Session, ids: list[int], new_referenceid: str) -> int:
    accounts = _bulk_update(db, ids, status=TRANSFERRED, referenceid=new_referenceid)
    logger.info("Transferred %d account(s) to %s", len(accounts), new_referenceid)
    return len(accounts)


# ── Duplicate company check ────────────────────────────────────────────────
def clean_company_name(name: str | None) -> str:
    """Upper-case name without punctuation, extra spaces or a trailing number."""
    if not name:
        return ""
    n = re.sub(r"[-_.@!$%]", "", name.upper())
    n = re.sub(r"\s+", " ", n).strip()
    return re.sub(r"\d+$", "", n).strip()


def edit_distance(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def find_duplicates(db: Session, company_name: str) -> dict:
    """Existing accounts whose cleaned company name is within a few edits of ``company_name``."""
    cleaned = clean_company_name(company_name)
    if not cleaned:
        raise HTTPException(status_code=400, detail="Missing company_name")
    rows = db.execute(
        select(Account.company_name, Account.referenceid).where(Account.status != REMOVED)
    ).all()
    companies = [
        {"company_name": name, "owner_referenceid": owner}
        for name, owner in rows
        if edit_distance(cleaned, clean_company_name(name)) <= DUPLICATE_MAX_DISTANCE
    ]
    return {"exists": bool(companies), "companies": companies}
