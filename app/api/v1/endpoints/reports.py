"""Admin reporting endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import ADMIN_ROLES
from app.core.security import require_roles
from app.db.session import get_db
from app.models.user import User
from app.schemas.report import DailyCount, DietaryCount, DishCount, ReportBundle, WardWaste, WeeklyCount
from app.services import reporting

router: APIRouter = APIRouter()


@router.get("", response_model=ReportBundle)
def get_reports(
    days: int | None = None,
    weeks: int | None = None,
    top: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> ReportBundle:
    return reporting.build_report(db, days=days, weeks=weeks, top=top)


@router.get("/daily", response_model=list[DailyCount])
def get_daily_counts(
    days: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> list[DailyCount]:
    return reporting.daily_meal_counts(db, days)


@router.get("/weekly", response_model=list[WeeklyCount])
def get_weekly_counts(
    weeks: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> list[WeeklyCount]:
    return reporting.weekly_meal_counts(db, weeks)


@router.get("/top-dishes", response_model=list[DishCount])
def get_top_dishes(
    top: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> list[DishCount]:
    return reporting.most_requested_dishes(db, top)


@router.get("/dietary", response_model=list[DietaryCount])
def get_dietary_counts(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> list[DietaryCount]:
    return reporting.orders_by_dietary_restriction(db)


@router.get("/waste", response_model=list[WardWaste])
def get_waste_by_ward(
    days: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> list[WardWaste]:
    return reporting.waste_by_ward_daily(db, days)
