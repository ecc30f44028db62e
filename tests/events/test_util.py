from datetime import date
from typing import Type, Union

import pytest

from daylog.events.util import format_date, parse_date, split_categories


@pytest.mark.parametrize(
    "given,expected",
    [
        ("", ValueError),
        ("2024", ValueError),
        ("2024-13-01", ValueError),
        ("01/02/2024", ValueError),
        ("2024-02-29", date(2024, 2, 29)),
        (" 2024-01-01 ", date(2024, 1, 1)),
    ],
)
def test_parse_date(given: str, expected: Union[date, Type[Exception]]) -> None:
    if isinstance(expected, date):
        assert parse_date(given) == expected
    elif issubclass(expected, BaseException):
        with pytest.raises(expected):
            parse_date(given)
    else:
        assert False, f"Unexpected expected: {expected}"


def test_format_date() -> None:
    assert format_date(date(2024, 1, 5)) == "2024-01-05"
    assert parse_date(format_date(date(1999, 12, 31))) == date(1999, 12, 31)


@pytest.mark.parametrize(
    "given,expected",
    [
        ("work", {"work"}),
        ("work,home", {"work", "home"}),
        ("work,work", {"work"}),
        # An empty category matches events without one
        ("", {""}),
    ],
)
def test_split_categories(given: str, expected: set[str]) -> None:
    assert split_categories(given) == expected
