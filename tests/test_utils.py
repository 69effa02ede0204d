import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from utils import format_currency, parse_numeric_value, sanitize_numeric_value


def test_sanitize_strips_thousands_separators():
    assert sanitize_numeric_value("250,000") == 250_000


def test_sanitize_strips_whitespace_and_keeps_decimals():
    assert sanitize_numeric_value(" 1,234.5 ") == 1_234.5


def test_sanitize_empty_or_garbage_is_zero():
    assert sanitize_numeric_value("") == 0
    assert sanitize_numeric_value("abc") == 0


def test_sanitize_reads_leading_number():
    assert sanitize_numeric_value("12abc") == 12
    assert sanitize_numeric_value("-5") == -5
    assert sanitize_numeric_value(".5") == 0.5


def test_format_currency():
    assert format_currency(12_345.6) == "$12,346"
    assert format_currency(-1_000) == "-$1,000"
    assert format_currency(0) == "$0"


def test_sanitize_negative_with_separators_and_padding():
    assert sanitize_numeric_value(" -1,000 ") == -1_000


def test_parse_distinguishes_garbage_from_zero():
    assert parse_numeric_value("abc") is None
    assert parse_numeric_value("") is None
    assert parse_numeric_value("0") == 0
    assert parse_numeric_value("250,000") == 250_000
