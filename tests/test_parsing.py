from __future__ import annotations

import math

import pytest

from finhealth.models import InsuranceStatus, JobStability, LoanType, MarketBehavior
from finhealth.utils.formatting import (
    format_amount,
    format_inr,
    group_indian,
)
from finhealth.utils.parsing import parse_numeric_or_zero, round_half_up


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        ("12abc", 12.0),
        (" 42 ", 42.0),
        ("₹1,00,000", 100_000.0),
        ("Rs. 25,000", 25_000.0),
        ("INR 5000", 5_000.0),
        ("-500", -500.0),
        (".5", 0.5),
        ("1e3", 1_000.0),
        (150000, 150_000.0),
        (float("nan"), 0.0),
        (math.inf, 0.0),
    ],
)
def test_parse_numeric_or_zero(raw, expected):
    assert parse_numeric_or_zero(raw) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.4) == 1


def test_market_behavior_classification():
    assert MarketBehavior.from_label(None) is MarketBehavior.NERVOUS_HOLD
    assert MarketBehavior.from_label("") is MarketBehavior.NERVOUS_HOLD
    assert MarketBehavior.from_label("Panic and sell") is MarketBehavior.PANIC
    assert MarketBehavior.from_label("I see a buying opportunity") is MarketBehavior.BUYING_OPPORTUNITY
    assert MarketBehavior.from_label("I'd hold") is MarketBehavior.NERVOUS_HOLD
    assert MarketBehavior.from_label("sell everything") is MarketBehavior.OTHER


def test_enum_fallbacks():
    assert LoanType.from_label("") is LoanType.NONE
    assert LoanType.from_label("Student loan") is LoanType.MULTIPLE
    assert InsuranceStatus.from_label("maybe") is InsuranceStatus.NONE
    assert JobStability.from_label("freelance") is JobStability.MODERATE
    assert JobStability.from_label("Very Stable") is JobStability.VERY_STABLE


def test_indian_grouping():
    assert group_indian(999) == "999"
    assert group_indian(123456) == "1,23,456"
    assert group_indian(45000.5) == "45,000.5"
    assert group_indian(10_000_000) == "1,00,00,000"
    assert group_indian(-1500) == "-1,500"


def test_amount_formats():
    assert format_amount(270_000) == "₹2.7 Lakhs"
    assert format_amount(12_000_000) == "₹1.2 Crores"
    assert format_amount(45_000) == "₹45,000"
    assert format_inr(750_000) == "₹7.50 L"
    assert format_inr(900) == "₹900"
