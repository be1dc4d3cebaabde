"""
Season Clock

Seasons are fixed-length blocks of weeks counted from a fixed epoch. There is
no stored "current season": it is always derived from the wall clock, so
seasons never need to be opened or closed explicitly.

Usage:
    from guess_league.scoring.season import season_for, date_range_for
    season_for(date(2025, 11, 8))   # -> 2
    date_range_for(2)               # -> (date(2025, 10, 23), date(2026, 1, 14))
"""

from datetime import date, datetime, timedelta

import pandas as pd

from guess_league.config import (
    SEASON_EPOCH,
    SEASON_LENGTH_WEEKS,
    SEASON_LENGTH_DAYS,
    DATE_DISPLAY_FORMAT,
)
from guess_league.errors import InvalidInput


def _to_date(now) -> date:
    """Reduce a date, datetime or pandas Timestamp to its calendar date."""
    if isinstance(now, pd.Timestamp):
        return now.date()
    if isinstance(now, datetime):
        return now.date()
    if isinstance(now, date):
        return now
    raise InvalidInput(f"Expected a date or datetime, got {type(now).__name__}")


def season_for(now) -> int:
    """
    Map a point in time to its season id.

    Args:
        now: date, datetime or pandas Timestamp

    Returns:
        Season id (>= 1)

    Raises:
        InvalidInput: If `now` lies before the season epoch
    """
    day = _to_date(now)
    if day < SEASON_EPOCH:
        raise InvalidInput(
            f"{day.isoformat()} is before the first season ({SEASON_EPOCH.isoformat()})"
        )

    weeks_since_epoch = (day - SEASON_EPOCH).days // 7
    return weeks_since_epoch // SEASON_LENGTH_WEEKS + 1


def current_season(now=None) -> int:
    """Season id for `now`, defaulting to today."""
    return season_for(now if now is not None else datetime.now())


def date_range_for(season_id: int) -> tuple[date, date]:
    """
    Inverse of season_for: first and last calendar day of a season.

    Raises:
        InvalidInput: If season_id < 1
    """
    if season_id < 1:
        raise InvalidInput(f"Season ids start at 1, got {season_id}")

    start = SEASON_EPOCH + timedelta(days=(season_id - 1) * SEASON_LENGTH_DAYS)
    end = start + timedelta(days=SEASON_LENGTH_DAYS - 1)
    return start, end


def format_date_range(season_id: int) -> str:
    """Render a season's date range for display, e.g. "31.07.2025 - 22.10.2025"."""
    start, end = date_range_for(season_id)
    return f"{start.strftime(DATE_DISPLAY_FORMAT)} - {end.strftime(DATE_DISPLAY_FORMAT)}"
