"""
Date helpers for inventory rows: asset age, warranty expiry and the
"old equipment" rule.

All functions accept loosely typed input (``date``, ``datetime`` or a string
as it arrives from a form or an import file) and never raise on bad input.
"""
import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%m/%d/%Y", "%Y/%m/%d")

WARRANTY_COVERED = "Warranty Covered"
WARRANTY_EXPIRED = "Out of Warranty / Expired"


def parse_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def local_today(tz_name: str | None = None) -> date:
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, months: int) -> date:
    """Calendar month arithmetic; the day is clamped to the target month length."""
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def age_parts(purchase, now=None) -> tuple[int, int, int] | None:
    """(years, months, days) elapsed from ``purchase`` to ``now``.

    Days borrow the length of the month preceding ``now``'s month; when the
    purchase day is larger than that month, borrowing continues into earlier
    months so no component is negative.
    """
    p = parse_date(purchase)
    n = parse_date(now) if now is not None else date.today()
    if p is None or n is None:
        return None
    if p > n:
        return 0, 0, 0

    years = n.year - p.year
    months = n.month - p.month
    days = n.day - p.day

    borrow_year, borrow_month = n.year, n.month
    while days < 0:
        months -= 1
        borrow_month -= 1
        if borrow_month == 0:
            borrow_month = 12
            borrow_year -= 1
        days += days_in_month(borrow_year, borrow_month)

    if months < 0:
        years -= 1
        months += 12
    return years, months, days


def asset_age(purchase, now=None) -> str | None:
    parts = age_parts(purchase, now)
    if parts is None:
        return None
    y, m, d = parts
    return f"{y}y, {m}m, {d}d"


def warranty_date(purchase) -> date | None:
    """One calendar year after purchase. Feb 29 lands on Feb 28."""
    p = parse_date(purchase)
    if p is None:
        return None
    year = p.year + 1
    return date(year, p.month, min(p.day, days_in_month(year, p.month)))


def warranty_info(warranty, today=None) -> tuple[str, int | None]:
    w = parse_date(warranty)
    if w is None:
        return "-", None
    t = parse_date(today) if today is not None else date.today()
    remaining = (w - t).days
    if remaining > 0:
        return WARRANTY_COVERED, remaining
    return WARRANTY_EXPIRED, 0


def is_old_item(purchase, status, today=None, years: int = 5) -> bool:
    p = parse_date(purchase)
    if p is None:
        return False
    t = parse_date(today) if today is not None else date.today()
    cutoff = add_months(t, -12 * years)
    return p < cutoff and str(status or "").upper() != "DISPOSE"
