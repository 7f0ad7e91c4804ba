from datetime import date

import pytest

from fitlog.core import coerce
from fitlog.core.config import settings


def test_to_float_parses_numbers_and_numeric_strings():
    assert coerce.to_float(12.5) == 12.5
    assert coerce.to_float("82.5") == 82.5
    assert coerce.to_float(" 7 ") == 7.0


def test_falsy_values_are_absent():
    assert coerce.to_float(0) is None
    assert coerce.to_float(0.0) is None
    assert coerce.to_float("") is None
    assert coerce.to_float(None) is None
    assert coerce.to_int(0) is None


def test_string_zero_is_truthy_and_kept():
    assert coerce.to_float("0") == 0.0


def test_keep_zero_values_setting(monkeypatch):
    monkeypatch.setattr(settings, "KEEP_ZERO_VALUES", True)
    assert coerce.to_float(0) == 0.0
    assert coerce.to_int(0) == 0
    assert coerce.to_float(None) is None
    assert coerce.to_float("  ") is None


def test_to_int_truncates():
    assert coerce.to_int("7.9") == 7
    assert coerce.to_int(7.9) == 7
    assert coerce.to_int("42") == 42


def test_malformed_numbers_raise():
    with pytest.raises(ValueError):
        coerce.to_int("abc")
    with pytest.raises(ValueError):
        coerce.to_float("lots")


def test_presence_checks_keep_zero():
    assert coerce.opt_int(0) == 0
    assert coerce.opt_int(None) is None
    assert coerce.opt_float(0) == 0.0


def test_opt_str():
    assert coerce.opt_str("") is None
    assert coerce.opt_str(None) is None
    assert coerce.opt_str("06:30") == "06:30"


def test_pct():
    assert coerce.pct(72, 480) == 15
    assert coerce.pct(100, 480) == 21
    assert coerce.pct(10, 0) is None
    assert coerce.pct(10, None) is None
    assert coerce.pct(None, 480) is None


def test_round_half_up():
    assert coerce.round_half_up(12.5) == 13
    assert coerce.round_half_up(12.49) == 12
    assert coerce.round_half_up(0.5) == 1


def test_parse_date_variants():
    assert coerce.parse_date("2026-03-01") == date(2026, 3, 1)
    assert coerce.parse_date("2026-03-01T08:15:00Z") == date(2026, 3, 1)
    assert coerce.parse_date("2026-03-01T08:15:00+10:00") == date(2026, 3, 1)
    assert coerce.parse_date(date(2026, 3, 1)) == date(2026, 3, 1)

    with pytest.raises(ValueError):
        coerce.parse_date("yesterday")
    with pytest.raises(ValueError):
        coerce.parse_date(20260301)
