from datetime import date, datetime

import pytest

from energix import (
    format_currency,
    format_date,
    format_file_size,
    format_number,
    format_percentage,
    format_precise_number,
)

NNBSP = '\u202f'  # fr-FR digit grouping
NBSP = '\u00a0'


@pytest.mark.parametrize("value", [None, float('nan')])
def test_missing_numbers_are_not_available(value):
    assert format_number(value) == "N/A"
    assert format_currency(value) == "N/A"
    assert format_percentage(value) == "N/A"
    assert format_precise_number(value) == "N/A"


def test_french_number_format():
    assert format_number(1234.5, decimals=2) == f"1{NNBSP}234,50"
    assert format_number(1234567.891, decimals=0) == f"1{NNBSP}234{NNBSP}568"
    assert format_number(-1234.5) == f"-1{NNBSP}234,50"
    assert format_number(12) == "12,00"


def test_half_values_round_away_from_zero():
    assert format_number(0.125) == "0,13"
    assert format_number(2.5, decimals=0) == "3"


def test_english_number_format():
    assert format_number(1234.5, locale='en-US') == "1,234.50"


def test_very_large_numbers():
    assert format_number(1e27) == "1" + f"{NNBSP}000" * 9 + ",00"
    assert format_number(-1e30, decimals=0, locale='en-US') == "-1" + ",000" * 10
    assert format_currency(1e27).endswith(f",00{NBSP}TND")
    assert format_percentage(1e26).endswith(f",00{NNBSP}%")


def test_unknown_locale_falls_back_to_french(caplog):
    with caplog.at_level('WARNING'):
        assert format_number(1234.5, locale='de-DE') == f"1{NNBSP}234,50"
    assert "Unsupported locale" in caplog.text


def test_unknown_style():
    with pytest.raises(ValueError):
        format_number(1, style='scientific')


def test_currency():
    assert format_currency(1234.5) == f"1{NNBSP}234,50{NBSP}TND"
    assert format_currency(3, decimals=3, currency='EUR') == f"3,000{NBSP}EUR"
    assert format_currency(1234.5, locale='en-US', currency='USD') == f"USD{NBSP}1,234.50"


def test_percentage():
    assert format_percentage(0.125) == f"12,50{NNBSP}%"
    assert format_percentage(0.5, decimals=0, locale='en-US') == "50%"


def test_french_dates():
    assert format_date('2024-01-15') == "15 janvier 2024"
    assert format_date(date(2024, 8, 1)) == "1 août 2024"
    assert format_date('2024-01-15', format='short') == "15/01/2024"
    assert format_date(datetime(2024, 1, 15, 14, 30), include_time=True) == "15 janvier 2024 à 14:30"
    assert format_date(datetime(2024, 1, 15, 9, 5), format='short', include_time=True) == "15/01/2024 09:05"


def test_english_dates():
    assert format_date('2024-01-15', locale='en-US') == "January 15, 2024"
    assert format_date('2024-01-15', locale='en-US', format='short') == "1/15/2024"
    assert format_date(datetime(2024, 1, 15, 14, 30), locale='en-US', include_time=True) == \
        "January 15, 2024 at 02:30 PM"


def test_empty_and_invalid_dates():
    assert format_date(None) == "N/A"
    assert format_date('') == "N/A"
    assert format_date('not a date') == "Invalid Date"


def test_precise_number():
    assert format_precise_number(0.123456789) == "0.123457"
    assert format_precise_number(1.5) == "1.5"
    assert format_precise_number(2, min_decimals=2) == "2.00"
    assert format_precise_number(-0.25) == "-0.25"


def test_precise_number_extremes():
    assert format_precise_number(1e-9) == "0"
    assert format_precise_number(1e-9, min_decimals=2) == "0.00"
    assert format_precise_number(12345678.9) == "1.234568e+07"
    assert format_precise_number(-12345678.9) == "-1.234568e+07"


@pytest.mark.parametrize("size, expected", [
    (0, "0 Bytes"),
    (500, "500 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (int(2.25 * 1024 ** 2), "2.25 MB"),
    (1024 ** 3, "1 GB"),
    (-1, "N/A"),
    (None, "N/A"),
])
def test_file_size(size, expected):
    assert format_file_size(size) == expected
