"""Application services tying the event store to settings and persistence."""

from __future__ import annotations

from .calendar import CalendarService, MonthOverview
from .context import ServiceContext

__all__ = ["CalendarService", "MonthOverview", "ServiceContext"]
