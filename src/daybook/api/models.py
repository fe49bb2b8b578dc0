from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core import WEEKDAY_LABELS
from ..domain import Event
from ..services import MonthOverview


class EventDraftPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    description: str = Field(default="")
    color: Optional[str] = Field(default=None)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    description: str = Field(default="")
    color: str
    date: str

    @classmethod
    def from_domain(cls, event: Event) -> "EventPayload":
        return cls(
            id=event.id,
            name=event.name,
            start_time=event.start_time,
            end_time=event.end_time,
            description=event.description,
            color=event.color,
            date=event.date,
        )


class SearchHitPayload(BaseModel):
    date: str
    event: EventPayload


class MonthPayload(BaseModel):
    year: int
    month: int
    weekdays: List[str] = Field(default_factory=lambda: list(WEEKDAY_LABELS))
    weeks: List[List[Optional[int]]]
    counts: Dict[str, int] = Field(default_factory=dict)
    today: Optional[int] = Field(default=None)

    @classmethod
    def from_overview(cls, overview: MonthOverview) -> "MonthPayload":
        return cls(
            year=overview.year,
            month=overview.month,
            weeks=overview.weeks,
            counts={str(day): count for day, count in overview.counts.items()},
            today=overview.today,
        )
