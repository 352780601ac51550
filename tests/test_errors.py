import sqlite3

import pytest

from schemascope.errors import (
    DatabaseError,
    NoIndexesFound,
    ParseFloatError,
    ParseIntError,
    SqliteDiscoveryError,
)


def test_parse_int_message():
    assert str(ParseIntError()) == "Parse Integer Error"


def test_no_indexes_message():
    assert str(NoIndexesFound()) == "No Indexes Found Error"


def test_parse_float_message_mentions_float():
    assert "Float" in str(ParseFloatError())


@pytest.mark.parametrize(
    "error, message",
    [
        (ParseIntError(), "Parse Integer Error"),
        (NoIndexesFound(), "No Indexes Found Error"),
    ],
)
def test_all_errors_share_base(error, message):
    with pytest.raises(SqliteDiscoveryError) as info:
        raise error
    assert info.value is error
    assert str(info.value) == message
    assert isinstance(info.value, SqliteDiscoveryError)


def test_parse_float_error_shares_base():
    error = ParseFloatError()
    with pytest.raises(SqliteDiscoveryError) as info:
        raise error
    assert info.value is error
    assert "Float" in str(info.value)


def test_parse_errors_are_value_errors():
    int_error = ParseIntError()
    float_error = ParseFloatError()

    assert issubclass(ParseIntError, ValueError)
    assert issubclass(ParseFloatError, ValueError)
    assert str(int_error) == "Parse Integer Error"
    assert "Float" in str(float_error)

    with pytest.raises(ValueError, match="Parse Integer Error") as int_info:
        raise int_error
    assert int_info.value is int_error

    with pytest.raises(ValueError, match="Float") as float_info:
        raise float_error
    assert float_info.value is float_error


def test_database_error_wraps_driver_error():
    original = sqlite3.OperationalError("no such table: missing")
    error = DatabaseError(original)
    assert error.error is original
    assert repr(original) in str(error)
    with pytest.raises(SqliteDiscoveryError):
        raise error