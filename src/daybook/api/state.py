from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..services import CalendarService, ServiceContext


@dataclass(slots=True)
class ApiState:
    """Services shared by the API functions, built on first use."""

    _calendar: Optional[CalendarService] = None

    def bind(self, context: ServiceContext) -> CalendarService:
        self._calendar = CalendarService(context)
        return self._calendar

    def reset(self) -> None:
        self._calendar = None

    @property
    def calendar(self) -> CalendarService:
        if self._calendar is None:
            return self.bind(ServiceContext())
        return self._calendar

    @property
    def context(self) -> ServiceContext:
        return self.calendar.context


api_state = ApiState()
