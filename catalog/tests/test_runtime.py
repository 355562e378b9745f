import pytest

from core.errors import InvalidRuntimeFormat
from core.runtime import decode_runtime, encode_runtime, format_runtime, parse_runtime


def test_encode_uses_minutes_and_quotes():
    assert encode_runtime(102) == '"102 minutes"'


def test_format_runtime():
    assert format_runtime(102) == "102 minutes"


def test_decode_mins():
    assert decode_runtime('"102 mins"') == 102
    assert decode_runtime(b'"102 mins"') == 102


def test_decode_signed_values():
    assert decode_runtime('"-5 mins"') == -5
    assert decode_runtime('"+7 mins"') == 7


@pytest.mark.parametrize(
    "raw",
    [
        '"102 minutes"',  # output spelling is not accepted on input
        '"abc mins"',
        '"102mins"',
        '"102  mins"',
        '"102 mins extra"',
        '" 102 mins"',
        '"1_000 mins"',
        '"2147483648 mins"',
        '"-2147483649 mins"',
        "102",  # not a JSON string
        "null",
        '"102 mins',  # unterminated
        "",
    ],
)
def test_decode_rejects(raw):
    with pytest.raises(InvalidRuntimeFormat):
        decode_runtime(raw)


def test_decode_int32_bounds():
    assert decode_runtime('"2147483647 mins"') == 2147483647
    assert decode_runtime('"-2147483648 mins"') == -2147483648


def test_parse_rejects_non_string():
    with pytest.raises(InvalidRuntimeFormat):
        parse_runtime(102)


def test_invalid_format_is_value_error():
    with pytest.raises(ValueError, match="invalid runtime format"):
        parse_runtime("ten mins")
