"""
Activity planner: activities, their history rows, and the completed and
scheduled views built on top of them.

List reads go through the TTL cache keyed by ``referenceid``; every write
drops the key it affects.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session
from sqlalchemy import select
from fastapi import HTTPException

from assetdesk.cache import cache, activity_key, history_key, invalidate
from assetdesk.models.account import Account
from assetdesk.models.activity import Activity, History
from assetdesk.realtime import feed
from assetdesk.schemas.activity import (
    ActivityCreate, ActivityUpdate, ActivityResponse, HistoryCreate, HistoryUpdate, HistoryResponse,
)
from assetdesk.services.cluster_service import normalize_date

logger = logging.getLogger(__name__)

DONE = "Done"
DELIVERED = "Delivered"
UNKNOWN_COMPANY = "Unknown Company"


def _activity_record(activity: Activity) -> dict:
    return ActivityResponse.model_validate(activity).model_dump(mode="json")


def _history_record(row: History) -> dict:
    return HistoryResponse.model_validate(row).model_dump(mode="json")


# ── Activities ─────────────────────────────────────────────────────────────
def get_activities(db: Session, referenceid: str) -> tuple[list[dict], bool]:
    def load():
        rows = db.scalars(
            select(Activity)
            .where(Activity.referenceid == referenceid)
            .order_by(Activity.date_created.desc(), Activity.id.desc())
        ).all()
        return [_activity_record(a) for a in rows]

    return cache.get_or_load(activity_key(referenceid), load)


def get_activity(db: Session, activity_id: int) -> Activity:
    activity = db.get(Activity, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


def create_activity(db: Session, data: ActivityCreate) -> Activity:
    exists = db.scalar(
        select(Activity.id).where(Activity.activity_reference_number == data.activity_reference_number)
    )
    if exists:
        raise HTTPException(status_code=409, detail="Activity reference number already exists")
    activity = Activity(**data.model_dump())
    db.add(activity)
    db.commit()
    db.refresh(activity)
    invalidate(activity_key(activity.referenceid))
    feed.publish("activities", "insert", _activity_record(activity))
    return activity


def update_activity(db: Session, activity_id: int, data: ActivityUpdate) -> Activity:
    activity = get_activity(db, activity_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(activity, field, value)
    db.commit()
    db.refresh(activity)
    invalidate(activity_key(activity.referenceid))
    feed.publish("activities", "update", _activity_record(activity))
    return activity


def delete_activities(db: Session, ids: list[int]) -> int:
    activities = db.scalars(select(Activity).where(Activity.id.in_(ids))).all()
    records = [_activity_record(a) for a in activities]
    for activity in activities:
        db.delete(activity)
    db.commit()

    invalidate(*{activity_key(r["referenceid"]) for r in records})
    for record in records:
        feed.publish("activities", "delete", record)
    logger.info("Deleted %d activities", len(records))
    return len(records)


# ── History ────────────────────────────────────────────────────────────────
def get_history(db: Session, referenceid: str) -> tuple[list[dict], bool]:
    if not referenceid:
        raise HTTPException(status_code=400, detail="Missing referenceid")

    def load():
        rows = db.scalars(
            select(History)
            .where(History.referenceid == referenceid)
            .order_by(History.date_created.desc(), History.id.desc())
        ).all()
        return [_history_record(h) for h in rows]

    return cache.get_or_load(history_key(referenceid), load)


def get_history_row(db: Session, history_id: int) -> History:
    row = db.get(History, history_id)
    if not row:
        raise HTTPException(status_code=404, detail="History entry not found")
    return row


def _history_changed(row: History, event_type: str) -> None:
    if row.referenceid:
        invalidate(history_key(row.referenceid))
    feed.publish("history", event_type, _history_record(row))
    logger.debug("history %s for activity %s", event_type, row.activity_reference_number)


def create_history(db: Session, data: HistoryCreate) -> History:
    row = History(**data.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    _history_changed(row, "insert")
    return row


def update_history(db: Session, history_id: int, data: HistoryUpdate) -> History:
    row = get_history_row(db, history_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("status", "type_activity") and value is None:
            continue
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    _history_changed(row, "update")
    return row


def delete_history(db: Session, ids: list[int], remarks: str | None = None) -> int:
    """Hard delete of history rows; ``remarks`` is the reason, kept in the log only."""
    rows = db.scalars(select(History).where(History.id.in_(ids))).all()
    records = [_history_record(r) for r in rows]
    for row in rows:
        db.delete(row)
    db.commit()

    invalidate(*{history_key(r["referenceid"]) for r in records if r["referenceid"]})
    for record in records:
        feed.publish("history", "delete", record)
    logger.info("Deleted %d history row(s): %s", len(records), remarks or "no remarks")
    return len(records)


def mark_done(db: Session, history_id: int) -> History:
    row = get_history_row(db, history_id)
    row.scheduled_status = DONE
    db.commit()
    db.refresh(row)
    _history_changed(row, "update")
    return row


# ── Planner views ──────────────────────────────────────────────────────────
def is_completed(row: dict) -> bool:
    return row.get("status") in (DELIVERED, DONE) or row.get("scheduled_status") == DONE


def completed_history(db: Session, referenceid: str) -> list[dict]:
    rows, _ = get_history(db, referenceid)
    accounts = {
        a.account_reference_number: a
        for a in db.scalars(select(Account).where(Account.referenceid == referenceid)).all()
    }
    result = []
    for row in rows:
        if not is_completed(row):
            continue
        account = accounts.get(row["account_reference_number"])
        result.append({
            **row,
            "company_name": account.company_name if account else UNKNOWN_COMPANY,
            "contact_number": (account.contact_number or "-") if account else "-",
            "type_client": account.type_client if account else row.get("type_client"),
        })
    result.sort(key=lambda r: r["date_updated"] or "", reverse=True)
    return result


def scheduled_history(
    db: Session,
    referenceid: str,
    today: date,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    """Open callbacks (today, or within the range when one is given) and today's follow-ups."""
    rows, _ = get_history(db, referenceid)
    today_key = today.isoformat()
    pending = [r for r in rows if r.get("scheduled_status") != DONE]

    def callback_due(row):
        day = normalize_date(row.get("callback"))
        if day is None:
            return False
        if date_from or date_to:
            return (not date_from or day >= date_from.isoformat()) and (not date_to or day <= date_to.isoformat())
        return day == today_key

    return {
        "callbacks": [r for r in pending if callback_due(r)],
        "followups": [
            r for r in pending
            if normalize_date(r.get("date_followup")) == today_key and r.get("status") != DELIVERED
        ],
    }
