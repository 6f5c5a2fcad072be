"""Reporting response schemas."""

from pydantic import BaseModel


class DailyCount(BaseModel):
    day: str
    count: int


class WeeklyCount(BaseModel):
    week: str
    count: int


class DishCount(BaseModel):
    item_name: str
    count: int


class DietaryCount(BaseModel):
    restriction: str
    count: int


class WardWaste(BaseModel):
    day: str
    ward: str
    waste_percent: float


class ReportBundle(BaseModel):
    """All aggregates shown on the admin reports page."""

    daily: list[DailyCount]
    weekly: list[WeeklyCount]
    top_dishes: list[DishCount]
    by_diet: list[DietaryCount]
    waste_by_ward_daily: list[WardWaste]
