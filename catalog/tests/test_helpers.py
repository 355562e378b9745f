import pytest
from starlette.datastructures import QueryParams

from api.helpers import read_csv, read_id_param, read_int, read_string
from core.errors import RecordNotFoundError
from core.validator import Validator


def test_read_string_default():
    assert read_string(QueryParams(""), "sort", "id") == "id"
    assert read_string(QueryParams("sort=-year"), "sort", "id") == "-year"


def test_read_csv():
    assert read_csv(QueryParams("genres=drama,war"), "genres", []) == ["drama", "war"]
    assert read_csv(QueryParams("genres="), "genres", []) == []
    assert read_csv(QueryParams(""), "genres", ["all"]) == ["all"]


def test_read_int():
    v = Validator()
    assert read_int(QueryParams("page=3"), "page", 1, v) == 3
    assert read_int(QueryParams(""), "page", 1, v) == 1
    assert read_int(QueryParams("page=-9223372036854775808"), "page", 1, v) == -(2**63)
    assert v.valid()


@pytest.mark.parametrize("raw", ["abc", "1.5", "1_0", " 2", "99999999999999999999999", "-9223372036854775809"])
def test_read_int_records_error(raw):
    v = Validator()
    assert read_int(QueryParams({"page": raw}), "page", 1, v) == 1
    assert v.errors == {"page": "must be an integer value"}


def test_read_id_param():
    assert read_id_param("42") == 42
    assert read_id_param("9223372036854775807") == 2**63 - 1


@pytest.mark.parametrize("raw", ["0", "-3", "abc", "", "4.0", "9223372036854775808", "99999999999999999999"])
def test_read_id_param_rejects(raw):
    with pytest.raises(RecordNotFoundError):
        read_id_param(raw)
