import time

import pytest

from jqkit.errors import InvalidArgTypeError, QueryExecutionError
from jqkit.timefuncs import (
    fromdateiso8601,
    gmtime,
    localtime,
    mktime,
    now,
    strflocaltime,
    strftime,
    strptime,
)

STAMP_TEXT = "2015-03-05T23:51:47Z"
STAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def test_fromdateiso8601_known_value():
    assert fromdateiso8601(STAMP_TEXT) == 1425599507


def test_strptime_known_value():
    assert strptime(STAMP_TEXT, STAMP_FORMAT) == [2015, 2, 5, 23, 51, 47, 4, 63]


def test_mktime_of_strptime_matches_iso_parse():
    assert mktime(strptime(STAMP_TEXT, STAMP_FORMAT)) == fromdateiso8601(STAMP_TEXT)


def test_strftime_inverts_iso_parse():
    assert strftime(fromdateiso8601(STAMP_TEXT), STAMP_FORMAT) == STAMP_TEXT


def test_strftime_accepts_broken_down_time():
    stamp = fromdateiso8601(STAMP_TEXT)
    assert strftime(gmtime(stamp), STAMP_FORMAT) == strftime(stamp, STAMP_FORMAT)


@pytest.mark.parametrize("stamp", [0, 1.5, 951782400, -86400.25, 4102444800])
def test_gmtime_mktime_round_trip(stamp):
    assert mktime(gmtime(stamp)) == stamp


@pytest.mark.parametrize("stamp", [0, 951782400, 1700000000, -1000000])
def test_strftime_strptime_round_trip(stamp):
    fmt = "%Y-%m-%d %H:%M:%S"
    assert strptime(strftime(stamp, fmt), fmt) == gmtime(stamp)


@pytest.mark.parametrize("stamp", [0, 1425599507, -3600])
def test_epoch_seconds_specifier(stamp):
    assert strftime(stamp, "%s") == str(stamp)


def test_composite_specifiers_expand():
    stamp = 1425599507
    assert strftime(stamp, "%F %T") == strftime(stamp, "%Y-%m-%d %H:%M:%S")
    assert strftime(stamp, "%D") == strftime(stamp, "%m/%d/%y")
    assert strftime(stamp, "%Z %z %%") == "UTC +0000 %"


def test_gmtime_fields_are_consistent():
    fields = gmtime(1425599507.25)
    assert fields[5] == pytest.approx(47.25)
    assert 0 <= fields[6] <= 6
    assert strftime(fields, "%w") == str(int(fields[6]))
    assert strftime(fields, "%j") == f"{int(fields[7]) + 1:03d}"


def test_gmtime_nan_is_epoch():
    assert gmtime(float("nan")) == gmtime(0)


def test_gmtime_infinite_raises():
    with pytest.raises(QueryExecutionError):
        gmtime(float("inf"))


def test_gmtime_rejects_non_number():
    with pytest.raises(InvalidArgTypeError):
        gmtime("0")


def test_fromdateiso8601_offset_and_fraction():
    base = fromdateiso8601(STAMP_TEXT)
    assert fromdateiso8601("2015-03-06T01:51:47+02:00") == base
    assert fromdateiso8601("2015-03-05T23:51:47.5Z") == base + 0.5


@pytest.mark.parametrize("text", ["2015-03-05", "2015-13-05T00:00:00Z", "junk"])
def test_fromdateiso8601_invalid(text):
    with pytest.raises(QueryExecutionError):
        fromdateiso8601(text)


def test_fromdateiso8601_rejects_non_string():
    with pytest.raises(InvalidArgTypeError):
        fromdateiso8601(0)


def test_mktime_rejects_bad_shape():
    with pytest.raises(InvalidArgTypeError):
        mktime(["a", 0, 1, 0, 0, 0])
    with pytest.raises(InvalidArgTypeError):
        mktime([2015, 0, 1])


def test_mktime_rejects_invalid_date():
    with pytest.raises(QueryExecutionError):
        mktime([2015, 12, 1, 0, 0, 0])


def test_strftime_errors():
    with pytest.raises(InvalidArgTypeError):
        strftime("now", "%Y")
    with pytest.raises(InvalidArgTypeError):
        strftime(0, 5)
    with pytest.raises(QueryExecutionError):
        strftime(0, "%Q")


def test_strptime_errors():
    with pytest.raises(InvalidArgTypeError):
        strptime(0, "%Y")
    with pytest.raises(QueryExecutionError):
        strptime("not a date", STAMP_FORMAT)


def test_now_is_current():
    assert abs(now(None) - time.time()) < 5


def test_strflocaltime_uses_tz(monkeypatch):
    monkeypatch.setenv("TZ", "XYZ-2")
    assert strflocaltime(0, "%H:%M %Z") == "02:00 XYZ"


def test_localtime_follows_fixed_offset(monkeypatch):
    monkeypatch.setenv("TZ", "XYZ-2")
    assert localtime(1425599507) == gmtime(1425599507 + 7200)


def test_strflocaltime_array_is_local_wall_time(monkeypatch):
    monkeypatch.setenv("TZ", "XYZ-2")
    fields = gmtime(1425599507)
    fmt = "%Y-%m-%d %H:%M:%S"
    assert strflocaltime(fields, fmt) == strftime(fields, fmt)


def test_strflocaltime_invalid_tz(monkeypatch):
    monkeypatch.setenv("TZ", "not a zone!")
    with pytest.raises(QueryExecutionError):
        strflocaltime(0, "%H")


def test_strflocaltime_rejects_bad_context():
    with pytest.raises(InvalidArgTypeError):
        strflocaltime({}, "%H")