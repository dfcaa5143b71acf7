from datetime import datetime

import pytest

from util.misc import (
    format_currency,
    format_datetime,
    format_list,
    format_time,
    make_slug,
    round_to,
    safe_redirect,
    title_case,
)


def test_round_to_rounds_half_up():
    assert round_to(1.005, 2) == 1.01
    assert round_to(2.675, 2) == 2.68
    assert round_to(10, 2) == 10.0
    assert round_to(3.14159, 3) == 3.142


def test_title_case():
    assert title_case("credit_card") == "Credit_card"
    assert title_case("IN TRANSIT order") == "In Transit Order"
    assert title_case("") == ""


@pytest.mark.parametrize(
    "items, expected",
    [
        ([], ""),
        (["Books"], "Books"),
        (["Books", "Kitchen"], "Books and Kitchen"),
        (["Books", "Kitchen", "Supplies"], "Books, Kitchen, and Supplies"),
    ],
)
def test_format_list(items, expected):
    assert format_list(items) == expected


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-3) == "-$3.00"
    assert format_currency("n/a") == "n/a"


def test_format_datetime_and_time():
    value = datetime(2024, 3, 5, 14, 7)
    assert format_datetime(value) == "Tue, Mar 05, 02:07 PM"
    assert format_time(value) == "02:07 PM"
    assert format_datetime(None) is None


def test_make_slug_is_lowercase_hyphenated():
    assert make_slug("Book Title") == "book-title"
    assert make_slug("  Dell Inspiron 15!! ") == "dell-inspiron-15"


@pytest.mark.parametrize(
    "target, expected",
    [
        ("/seller/orders", "/seller/orders"),
        (None, "/"),
        ("", "/"),
        ("//evil.example", "/"),
        ("https://evil.example/x", "/"),
        ("relative/path", "/"),
        ("/\\evil.example", "/"),
        ("/\\/evil.example", "/"),
        ("/seller\\..\\admin", "/"),
    ],
)
def test_safe_redirect(target, expected):
    assert safe_redirect(target) == expected
