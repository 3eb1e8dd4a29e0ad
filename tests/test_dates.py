"""
Tests for date helpers.
"""

from datetime import date, datetime

import pytest

from flownodes.utils.dates import parse_date, split_date


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        "value",
        [
            "1990-05-15",
            "1990-05-15T10:30:00",
            "1990-05-15T23:30:00Z",
            "05/15/1990",
            "1990/05/15",
            "05-15-1990",
            "May 15, 1990",
            "15 May 1990",
            " 1990-05-15 ",
        ],
    )
    def test_supported_formats(self, value):
        assert parse_date(value) == date(1990, 5, 15)

    def test_date_objects(self):
        assert parse_date(date(2020, 1, 2)) == date(2020, 1, 2)
        assert parse_date(datetime(2020, 1, 2, 13, 45)) == date(2020, 1, 2)

    def test_unrecognized(self):
        with pytest.raises(ValueError, match="Unrecognized date"):
            parse_date("next tuesday")


class TestSplitDate:
    """Tests for split_date."""

    def test_zero_padded_components(self):
        assert split_date("1990-05-15") == {"day": "15", "month": "05", "year": "1990"}

    def test_single_digit_day(self):
        assert split_date(date(2001, 11, 3)) == {"day": "03", "month": "11", "year": "2001"}
