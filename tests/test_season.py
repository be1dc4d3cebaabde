"""
Tests for the season clock.
"""

from datetime import date, datetime, timedelta

import pandas as pd
import pytest

from guess_league.config import SEASON_EPOCH, SEASON_LENGTH_DAYS
from guess_league.errors import InvalidInput
from guess_league.scoring.season import (
    current_season,
    date_range_for,
    format_date_range,
    season_for,
)


class TestSeasonFor:
    """Tests for season_for function."""

    def test_epoch_is_season_one(self):
        assert season_for(SEASON_EPOCH) == 1

    def test_last_day_of_season_one(self):
        assert season_for(SEASON_EPOCH + timedelta(days=SEASON_LENGTH_DAYS - 1)) == 1

    def test_first_day_of_season_two(self):
        assert season_for(SEASON_EPOCH + timedelta(days=SEASON_LENGTH_DAYS)) == 2

    def test_hundred_days_after_epoch(self):
        # 100 days = 14 full weeks -> floor(14 / 12) + 1
        assert season_for(date(2025, 7, 31) + timedelta(days=100)) == 2

    def test_accepts_datetime(self):
        assert season_for(datetime(2025, 11, 8, 23, 59)) == 2

    def test_accepts_pandas_timestamp(self):
        assert season_for(pd.Timestamp("2025-11-08 12:00")) == 2

    def test_pre_epoch_rejected(self):
        with pytest.raises(InvalidInput):
            season_for(SEASON_EPOCH - timedelta(days=1))

    def test_non_date_rejected(self):
        with pytest.raises(InvalidInput):
            season_for("2025-11-08")

    def test_monotonic(self):
        """Later instants never map to an earlier season."""
        seasons = [season_for(SEASON_EPOCH + timedelta(days=d)) for d in range(0, 1000, 3)]
        for i in range(len(seasons) - 1):
            assert seasons[i] <= seasons[i + 1]

    def test_current_season_uses_given_instant(self):
        assert current_season(date(2026, 1, 15)) == 3

    def test_current_season_defaults_to_now(self):
        assert current_season() == season_for(datetime.now())


class TestDateRangeFor:
    """Tests for date_range_for and format_date_range."""

    def test_season_one(self):
        assert date_range_for(1) == (date(2025, 7, 31), date(2025, 10, 22))

    def test_season_two(self):
        assert date_range_for(2) == (date(2025, 10, 23), date(2026, 1, 14))

    def test_range_is_twelve_weeks(self):
        start, end = date_range_for(5)
        assert (end - start).days == SEASON_LENGTH_DAYS - 1

    def test_inverts_season_for(self):
        for season_id in range(1, 10):
            start, end = date_range_for(season_id)
            assert season_for(start) == season_id
            assert season_for(end) == season_id

    def test_invalid_season_rejected(self):
        with pytest.raises(InvalidInput):
            date_range_for(0)

    def test_format(self):
        assert format_date_range(1) == "31.07.2025 - 22.10.2025"
