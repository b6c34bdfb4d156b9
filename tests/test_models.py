from __future__ import annotations

import dataclasses

import pytest

from finhealth.deep_score import parse_deep_form
from finhealth.ignite import calculate_ignite_metrics
from finhealth.models import (
    DeepFormData,
    HousingStatus,
    IgniteUserData,
    JobStability,
    RiskProfile,
    Stage1Answers,
    Stage2Data,
)


def test_stage1_from_quiz_answers():
    s1 = Stage1Answers.from_quiz_answers({1: "30-35", 4: "₹10-25 lakhs", 7: "Panic and sell"})
    assert s1.age == "30-35"
    assert s1.total_savings == "₹10-25 lakhs"
    assert s1.market_behavior == "Panic and sell"
    assert s1.monthly_income == ""


def test_deep_form_accepts_camel_case_and_normalises_enums():
    form = DeepFormData.from_dict({
        "monthlyIncome": "100000",
        "emiAmount": "5000",
        "jobStability": "Very Stable",
        "housingStatus": "Own",
        "riskComfort": "something else",
        "notAField": 1,
    })
    assert form.monthly_income == "100000"
    assert form.emi_amount == "5000"
    assert form.job_stability is JobStability.VERY_STABLE
    assert form.housing_status is HousingStatus.OWN
    assert form.risk_comfort is RiskProfile.MODERATE


def test_stage2_from_dict_parses_numbers():
    s2 = Stage2Data.from_dict({
        "home_loan_outstanding": "₹25,00,000",
        "homeLoanEMI": "22,000",
        "healthCover": "abc",
        "retirementAge": "55",
    })
    assert s2.home_loan_outstanding == 2_500_000
    assert s2.home_loan_emi == 22_000
    assert s2.health_cover == 0
    assert s2.retirement_age == 55


def test_records_are_frozen():
    s2 = Stage2Data()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s2.health_cover = 1


@pytest.mark.parametrize("raw, expected", [("false", False), ("0", False), ("no", False),
                                           ("", False), ("true", True), ("yes", True), (True, True)])
def test_stage2_flags_read_text_booleans(raw, expected):
    s2 = Stage2Data.from_dict({"equityMF": "100000", "hasRSU": raw, "rsuValue": "900000",
                               "hasSecondaryIncome": raw})
    assert s2.has_rsu is expected
    assert s2.has_secondary_income is expected


def test_rsu_declined_as_text_is_not_counted():
    s2 = Stage2Data.from_dict({"equityMF": "100000", "hasRSU": "false", "rsuValue": "900000"})
    assert calculate_ignite_metrics(IgniteUserData(stage2=s2)).total_assets == 100_000


def test_deep_form_secondary_income_flag_from_text():
    raw = {"monthlyIncome": "100000", "secondaryIncome": "50000"}
    off = DeepFormData.from_dict({**raw, "hasSecondaryIncome": "false"})
    on = DeepFormData.from_dict({**raw, "hasSecondaryIncome": "true"})
    assert off.has_secondary_income is False
    assert parse_deep_form(off).monthly_income == 100_000
    assert parse_deep_form(on).monthly_income == 150_000


def test_single_goal_string_is_not_split():
    assert Stage2Data(top_goals="Retirement").top_goals == ("Retirement",)
    assert Stage2Data.from_dict({"topGoals": "Buy a home"}).top_goals == ("Buy a home",)
