import datetime
import queue
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from typing import NamedTuple
from urllib.parse import urlsplit

import pytest

from encoder.classifier import (
    Kind,
    can_index_ordinally,
    encode_scalar,
    format_complex,
    format_float,
    format_time,
    is_empty_value,
    kind_of,
    kind_of_value,
)

UTC = datetime.timezone.utc


class Color(Enum):
    RED = "red"


class Level(IntEnum):
    OFF = 0
    ON = 1


class Point(NamedTuple):
    x: int
    y: int


@dataclass
class Pair:
    left: int = 0
    right: str = ""


class Plain:
    def __init__(self):
        self.name = "plain"


def generator():
    yield 1


@pytest.mark.parametrize(
    "value,kind",
    [
        (None, Kind.NONE),
        (True, Kind.BOOL),
        (3, Kind.INT),
        (1.5, Kind.FLOAT),
        (1j, Kind.COMPLEX),
        (Decimal("1.10"), Kind.DECIMAL),
        ("s", Kind.STRING),
        (b"b", Kind.BYTES),
        (bytearray(b"b"), Kind.BYTES),
        (datetime.datetime(2020, 1, 1), Kind.TIME),
        (datetime.date(2020, 1, 1), Kind.DATE),
        (datetime.time(1, 2), Kind.CLOCK),
        (urlsplit("http://example.com"), Kind.URL),
        (Color.RED, Kind.ENUM),
        (Level.ON, Kind.ENUM),
        (Pair(), Kind.STRUCT),
        (Point(1, 2), Kind.STRUCT),
        (Plain(), Kind.STRUCT),
        ({}, Kind.MAP),
        ([], Kind.SEQUENCE),
        ((), Kind.SEQUENCE),
        (range(3), Kind.SEQUENCE),
        ({1}, Kind.SET),
        (frozenset(), Kind.SET),
        (len, Kind.FUNC),
        (lambda: None, Kind.FUNC),
        (queue.Queue(), Kind.CHAN),
        (generator(), Kind.ITERATOR),
        (iter([]), Kind.ITERATOR),
        (Pair, Kind.TYPE),
        (datetime, Kind.MODULE),
    ],
)
def test_kind_of_value(value, kind):
    assert kind_of_value(value) is kind


def test_kind_is_resolved_per_type():
    assert kind_of(int) is kind_of(type(42))


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.0, "1"),
        (0.1, "0.1"),
        (2.5, "2.5"),
        (-2.5, "-2.5"),
        (100.0, "100"),
        (123456.0, "123456"),
        (1e6, "1e+06"),
        (1234567.0, "1.234567e+06"),
        (1.5e20, "1.5e+20"),
        (1e100, "1e+100"),
        (0.0001, "0.0001"),
        (1e-05, "1e-05"),
        (1.25e-07, "1.25e-07"),
        (0.30000000000000004, "0.30000000000000004"),
        (0.0, "0"),
        (-0.0, "-0"),
        (float("nan"), "NaN"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
    ],
)
def test_format_float(value, expected):
    assert format_float(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (complex(1, 2), "1+2i"),
        (complex(1.5, -0.5), "1.5-0.5i"),
        (complex(0, 1), "0+1i"),
        (complex(-1, 1e6), "-1+1e+06i"),
    ],
)
def test_format_complex(value, expected):
    assert format_complex(value) == expected


class TestTimeFormats:

    def test_full_timestamp_with_fraction_and_utc(self):
        value = datetime.datetime(2024, 1, 2, 3, 4, 5, 120000, tzinfo=UTC)

        assert format_time(value) == "2024-01-02T03:04:05.12Z"

    def test_full_timestamp_with_offset(self):
        tz = datetime.timezone(datetime.timedelta(hours=5, minutes=30))
        value = datetime.datetime(2024, 3, 1, 12, 0, tzinfo=tz)

        assert format_time(value) == "2024-03-01T12:00:00+05:30"

    def test_naive_timestamp_has_no_offset(self):
        assert format_time(datetime.datetime(2024, 3, 1, 12, 0, 1)) == "2024-03-01T12:00:01"

    def test_midnight_is_date_only(self):
        assert format_time(datetime.datetime(2024, 1, 2)) == "2024-01-02"
        assert format_time(datetime.datetime(2024, 1, 2, tzinfo=UTC)) == "2024-01-02"

    def test_unset_date_is_time_only(self):
        tz = datetime.timezone(datetime.timedelta(hours=-7))
        value = datetime.datetime(1, 1, 1, 15, 4, 5, 1, tzinfo=tz)

        assert format_time(value) == "15:04:05.000001-07:00"

    def test_date_and_clock(self):
        assert encode_scalar(datetime.date(2024, 5, 6), Kind.DATE) == "2024-05-06"
        assert encode_scalar(datetime.time(9, 30), Kind.CLOCK) == "09:30:00"
        assert encode_scalar(datetime.time(9, 30, tzinfo=UTC), Kind.CLOCK) == "09:30:00Z"


class TestEncodeScalar:

    def test_bool(self):
        assert encode_scalar(True, Kind.BOOL) == "true"
        assert encode_scalar(False, Kind.BOOL) == "false"

    def test_int(self):
        assert encode_scalar(-42, Kind.INT) == "-42"
        assert encode_scalar(7, Kind.INT) == "7"

    def test_decimal(self):
        assert encode_scalar(Decimal("1.10"), Kind.DECIMAL) == "1.10"

    def test_bytes_are_one_string(self):
        assert encode_scalar(bytes([104, 105]), Kind.BYTES) == "hi"
        assert encode_scalar(memoryview(b"hi"), Kind.BYTES) == "hi"

    def test_url(self):
        url = urlsplit("https://example.com/a b?q=1#top")

        assert encode_scalar(url, Kind.URL) == "https://example.com/a b?q=1#top"


class TestIsEmptyValue:

    @pytest.mark.parametrize(
        "value",
        [
            None, False, 0, 0.0, 0j, Decimal(0), "", b"", [], (), {}, set(),
            datetime.datetime.min, datetime.datetime(1, 1, 1, tzinfo=UTC),
            datetime.date.min, datetime.time(0, 0), urlsplit(""), Level.OFF,
            Pair(), Point(0, 0),
        ],
    )
    def test_zero_values(self, value):
        assert is_empty_value(value)

    @pytest.mark.parametrize(
        "value",
        [
            True, 1, 0.5, "x", b"x", [0], {"": ""}, {0},
            datetime.datetime(2020, 1, 1), datetime.date(2020, 1, 1),
            datetime.time(0, 0, 1), urlsplit("http://x"), Level.ON, Color.RED,
            Pair(left=1), Point(0, 1), Plain(), len,
        ],
    )
    def test_non_zero_values(self, value):
        assert not is_empty_value(value)


def test_can_index_ordinally():
    assert can_index_ordinally([1, 2])
    assert can_index_ordinally(())
    assert not can_index_ordinally({"0": 1})
    assert not can_index_ordinally("abc")
    assert not can_index_ordinally(b"abc")
