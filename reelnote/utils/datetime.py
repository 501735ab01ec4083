"""Datetime parsing helpers for provider payloads."""

from __future__ import annotations

from datetime import date


def parse_date(value: str | None) -> date | None:
    """Parse a full ``YYYY-MM-DD`` calendar date; anything else is unknown."""
    if not value or len(value) != 10 or value[4] != "-" or value[7] != "-":
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
