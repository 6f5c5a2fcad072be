"""Read-only meal and waste aggregations for the admin reports page.

Date bucketing is done in Python on UTC timestamps so the queries stay
portable across database backends.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import MenuItem, Order, Patient
from app.schemas.report import DailyCount, DietaryCount, DishCount, ReportBundle, WardWaste, WeeklyCount
from app.utils.time import as_utc, trailing_window_start, utc_now

NO_RESTRICTION_LABEL: str = "None"


def _positive_or(value: int | None, default: int) -> int:
    if value is None or value < 1:
        return default
    return value


def daily_meal_counts(db: Session, days: int | None = None, now: datetime | None = None) -> list[DailyCount]:
    """Count orders per calendar day over the trailing window, oldest day first."""
    days = _positive_or(days, settings.report_default_days)
    since = trailing_window_start(now or utc_now(), days)
    created = db.scalars(select(Order.created_at)).all()
    counts = Counter(as_utc(ts).strftime("%Y-%m-%d") for ts in created if as_utc(ts) >= since)
    return [DailyCount(day=day, count=count) for day, count in sorted(counts.items())]


def weekly_meal_counts(db: Session, weeks: int | None = None, now: datetime | None = None) -> list[WeeklyCount]:
    """Count orders per Monday-first week (``YYYY-WW``) over the trailing window."""
    weeks = _positive_or(weeks, settings.report_default_weeks)
    since = trailing_window_start(now or utc_now(), weeks * 7)
    created = db.scalars(select(Order.created_at)).all()
    counts = Counter(as_utc(ts).strftime("%Y-%W") for ts in created if as_utc(ts) >= since)
    return [WeeklyCount(week=week, count=count) for week, count in sorted(counts.items())]


def most_requested_dishes(db: Session, limit: int | None = None) -> list[DishCount]:
    """Top menu items by order count; ties resolve by item name ascending."""
    limit = _positive_or(limit, settings.report_default_top)
    order_count = func.count(Order.id).label("count")
    rows = db.execute(
        select(MenuItem.name, order_count)
        .join(Order, Order.item_id == MenuItem.id)
        .group_by(MenuItem.id, MenuItem.name)
        .order_by(order_count.desc(), MenuItem.name.asc())
        .limit(limit)
    ).all()
    return [DishCount(item_name=name, count=count) for name, count in rows]


def orders_by_dietary_restriction(db: Session) -> list[DietaryCount]:
    restrictions = db.scalars(select(Patient.dietary_restrictions).join(Order, Order.patient_id == Patient.id)).all()
    counts = Counter((label or "").strip() or NO_RESTRICTION_LABEL for label in restrictions)
    ordered = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    return [DietaryCount(restriction=label, count=count) for label, count in ordered]


def waste_by_ward_daily(db: Session, days: int | None = None, now: datetime | None = None) -> list[WardWaste]:
    """Average waste percent per (day, ward) for orders with recorded consumption."""
    days = _positive_or(days, settings.report_default_days)
    since = trailing_window_start(now or utc_now(), days)
    rows = db.execute(
        select(Order.consumption_recorded_at, Patient.ward, Order.waste_percent)
        .join(Patient, Patient.id == Order.patient_id)
        .where(Order.consumption_recorded_at.is_not(None))
    ).all()

    buckets: dict[tuple[str, str], list[int]] = defaultdict(list)
    for recorded_at, ward, waste in rows:
        recorded_at = as_utc(recorded_at)
        if recorded_at < since:
            continue
        buckets[(recorded_at.strftime("%Y-%m-%d"), ward)].append(waste)

    return [
        WardWaste(day=day, ward=ward, waste_percent=sum(values) / len(values))
        for (day, ward), values in sorted(buckets.items())
    ]


def build_report(
    db: Session,
    days: int | None = None,
    weeks: int | None = None,
    top: int | None = None,
    now: datetime | None = None,
) -> ReportBundle:
    now = now or utc_now()
    return ReportBundle(
        daily=daily_meal_counts(db, days, now),
        weekly=weekly_meal_counts(db, weeks, now),
        top_dishes=most_requested_dishes(db, top),
        by_diet=orders_by_dietary_restriction(db),
        waste_by_ward_daily=waste_by_ward_daily(db, days, now),
    )
