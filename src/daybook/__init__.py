"""Daybook: a single-user calendar with conflict-free daily events."""

from __future__ import annotations

__version__ = "0.1.0"
