"""
Tests for display helpers.
"""

from datetime import datetime, timezone

import pytest

from marketplace_admin.app.utils.formatting import format_date, format_price, parse_timestamp, to_date_input
from marketplace_admin.app.utils.images import get_image_url


@pytest.mark.parametrize(
    "path,base,expected",
    [
        (None, "https://cdn.test", None),
        ("", "https://cdn.test", None),
        ("https://other.test/a.png", "https://cdn.test", "https://other.test/a.png"),
        ("uploads/a.png", "https://cdn.test/", "https://cdn.test/uploads/a.png"),
        ("/uploads/a.png", "https://cdn.test", "https://cdn.test/uploads/a.png"),
        ("uploads/a.png", "", "uploads/a.png"),
    ],
)
def test_get_image_url(path, base, expected):
    assert get_image_url(path, base) == expected


def test_parse_timestamp_accepts_seconds_and_iso():
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2025-01-05T10:00:00Z") == datetime(2025, 1, 5, 10, tzinfo=timezone.utc)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None


def test_format_date():
    assert format_date("2025-01-05") == "Jan 5, 2025"
    assert format_date(None) == "N/A"


def test_to_date_input():
    assert to_date_input("1990-05-01T00:00:00Z") == "1990-05-01"
    assert to_date_input("") == ""


def test_format_price():
    assert format_price(1234.5) == "AED 1,234.50"
    assert format_price("99") == "AED 99.00"
    assert format_price(None) == "N/A"
    assert format_price("free") == "N/A"
