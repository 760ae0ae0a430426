"""Tests for number, date and string formatting helpers."""

import pytest

from src.pipeline.language_pages.formatting import (
    abbreviate,
    camel_case,
    clean_and_right_shift,
    format_count,
    format_currency,
    format_date,
    format_percent,
    indefinite_article,
    link_many_aftertext,
    make_pretty_url_link,
    to_comma_list,
)


@pytest.mark.parametrize(
    "value, expected",
    [("1234567", "1,234,567"), ("1234.5", "1,235"), (42, "42"), ("abc", "0"), (None, "0")],
)
def test_format_count(value, expected):
    assert format_count(value) == expected


@pytest.mark.parametrize(
    "value, decimals, expected",
    [
        (950, 0, "950"),
        (1234, 0, "1k"),
        (1500, 0, "2k"),
        (1234, 1, "1.2k"),
        (2_500_000, 0, "3m"),
        (999_600, 0, "1m"),
        ("3000000000", 0, "3b"),
    ],
)
def test_abbreviate(value, decimals, expected):
    assert abbreviate(value, decimals=decimals) == expected


def test_percent_rounds_to_two_decimals():
    assert format_percent("0.48237") == "48.24"
    assert format_percent("0.5") == "50"
    assert format_percent("0.123") == "12.3"


def test_currency_has_dollar_prefix():
    assert format_currency("85000") == "$85,000"


def test_format_date():
    assert format_date("2017-03-07T13:47:18.000Z") == "03/07/2017"
    assert format_date("1488894438") == "03/07/2017"
    assert format_date("not a date") == ""
    assert format_date(None) == ""


def test_string_helpers():
    assert indefinite_article("esoteric programming language") == "an"
    assert indefinite_article("programming language") == "a"
    assert indefinite_article("") == "a"
    assert camel_case("Bell Labs") == "bellLabs"
    assert camel_case("Guido van Rossum") == "guidoVanRossum"
    assert to_comma_list([".py"]) == ".py"
    assert to_comma_list([".py", ".pyw", ".pyi"]) == ".py, .pyw and .pyi"


def test_link_helpers():
    assert (
        make_pretty_url_link("https://www.python.org/doc/")
        == '<a href="https://www.python.org/doc/">python.org/doc</a>'
    )
    assert link_many_aftertext(["https://a", "https://b"]) == (
        "1. 2.\n link https://a 1.\n link https://b 2."
    )


def test_clean_and_right_shift():
    assert clean_and_right_shift("a\r\nb\nc") == "a\n b\n c"
    assert clean_and_right_shift("a\nb", 2) == "a\n  b"
