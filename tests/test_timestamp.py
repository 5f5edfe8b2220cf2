from datetime import datetime, timezone

import pytest

from logkeeper.errors import TimestampDecodeError
from logkeeper.timestamp import decode, encode, is_token


def test_encode_fixed_format():
    assert encode(datetime(2024, 3, 5, 7, 8, 9)) == "2024-03-05_07-08-09"


def test_encode_drops_microseconds():
    assert encode(datetime(2024, 3, 5, 7, 8, 9, 999999)) == "2024-03-05_07-08-09"


def test_encode_pads_small_years():
    assert encode(datetime(999, 1, 2, 3, 4, 5)) == "0999-01-02_03-04-05"


def test_encode_aware_uses_local_time():
    aware = datetime(2024, 3, 5, 7, 8, 9, tzinfo=timezone.utc)
    local = aware.astimezone().replace(tzinfo=None)
    assert encode(aware) == encode(local)


@pytest.mark.parametrize(
    "instant",
    [
        datetime(2024, 1, 1, 0, 0, 0),
        datetime(2024, 2, 29, 23, 59, 59),
        datetime(1999, 12, 31, 12, 30, 45),
        datetime(9999, 12, 31, 23, 59, 59),
        datetime(1, 1, 1, 0, 0, 0),
    ],
)
def test_decode_reverses_encode(instant):
    assert decode(encode(instant)) == instant


def test_token_order_matches_time_order():
    a = datetime(2024, 1, 9, 23, 59, 59)
    b = datetime(2024, 1, 10, 0, 0, 0)
    assert encode(a) < encode(b)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "notes",
        "2024-03-05",
        "2024-03-05_07-08-09x",
        " 2024-03-05_07-08-09",
        "2024-03-05 07-08-09",
        "2024-03-05_07:08:09",
        "2024/03/05_07-08-09",
        "2024-3-05_07-08-09",
        "2024-03-05_7-08-09",
        "24-03-05_07-08-09",
        "2024-13-05_07-08-09",
        "2024-00-05_07-08-09",
        "2024-02-30_07-08-09",
        "2024-03-00_07-08-09",
        "2024-03-05_24-08-09",
        "2024-03-05_07-60-09",
        "2024-03-05_07-08-60",
        "2024-03-05_07-08-61",
        "2024-03-05_07-08-09.123",
        "abcd-ef-gh_ij-kl-mn",
        "２０２４-03-05_07-08-09",
    ],
)
def test_decode_is_strict(token):
    with pytest.raises(TimestampDecodeError):
        decode(token)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode("nope")


def test_is_token():
    assert is_token("2024-03-05_07-08-09")
    assert not is_token("2024-03-05_07-08-09.log")
