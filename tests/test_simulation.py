import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import config as cfg
from simulation import (
    AggressivePayoffParams,
    CareerInfo,
    LoanPortfolio,
    PersonalInfo,
    Preferences,
    calculate_10_year_standard_payment,
    calculate_aggressive_payoff,
    calculate_amortization_payment,
    calculate_idr_payment,
    calculate_npv,
    get_effective_idr_payment,
    get_poverty_line,
    income_for_year,
    project_income,
    project_loan_balance,
)

PAYE = cfg.IDR_PLANS["PAYE"]
SAVE = cfg.IDR_PLANS["SAVE"]
ICR = cfg.IDR_PLANS["ICR"]


# ── Input validation ────────────────────────────────────────────────

def test_negative_balance_rejected():
    with pytest.raises(ValueError):
        LoanPortfolio(total_balance=-1, weighted_interest_rate=0.065)


def test_too_many_pslf_payments_rejected():
    with pytest.raises(ValueError):
        LoanPortfolio(total_balance=1_000, weighted_interest_rate=0.065, pslf_qualifying_payments=121)


def test_unknown_filing_status_rejected():
    with pytest.raises(ValueError):
        PersonalInfo(agi=60_000, filing_status="joint")


def test_pslf_confidence_out_of_range_rejected():
    with pytest.raises(ValueError):
        Preferences(pslf_confidence=1.5)


# ── Income projection ───────────────────────────────────────────────

def test_project_income_walks_training_then_attending():
    career = CareerInfo(specialty="internal_medicine", current_stage="pgy1", training_years_remaining=3)
    projection = project_income(career, 5, growth_rate=0.03)

    assert [p.stage for p in projection] == ["pgy1", "pgy2", "pgy3", "attending", "attending"]
    assert projection[0].income == 64_000
    assert projection[1].income == 67_980
    assert projection[2].income == 73_202
    # attending growth restarts at the transition year
    assert projection[3].income == 275_000
    assert projection[4].income == 283_250


def test_project_income_uses_salary_override():
    career = CareerInfo(
        specialty="internal_medicine",
        current_stage="attending",
        training_years_remaining=0,
        expected_attending_salary=300_000,
    )
    projection = project_income(career, 2, growth_rate=0.0)
    assert [p.income for p in projection] == [300_000, 300_000]


def test_project_income_stays_on_fellow_when_stages_run_out():
    career = CareerInfo(specialty="neurosurgery", current_stage="pgy7", training_years_remaining=3)
    projection = project_income(career, 3, growth_rate=0.0)
    assert [p.stage for p in projection] == ["pgy7", "fellow", "fellow"]
    assert projection[2].income == 85_000


def test_income_for_year_clamps_to_last_year():
    career = CareerInfo(specialty="pediatrics", current_stage="attending", training_years_remaining=0)
    projection = project_income(career, 3, growth_rate=0.0)
    assert income_for_year(projection, 10) == projection[-1].income
    assert income_for_year([], 0) == 0


# ── Payments ────────────────────────────────────────────────────────

def test_poverty_line():
    assert get_poverty_line(1) == 15_060
    assert get_poverty_line(4) == 31_200


def test_paye_payment_for_single_resident():
    # (65,000 - 1.5 * 15,060) * 10% / 12
    assert calculate_idr_payment(PAYE, 65_000, 1) == 353


def test_idr_payment_zero_below_poverty_shield():
    assert calculate_idr_payment(PAYE, 20_000, 1) == 0


def test_mfj_counts_spouse_income():
    assert calculate_idr_payment(PAYE, 65_000, 2, 50_000, "mfj") == 703


def test_mfs_ignores_spouse_income():
    alone = calculate_idr_payment(PAYE, 65_000, 2, 0, "mfs")
    with_spouse = calculate_idr_payment(PAYE, 65_000, 2, 200_000, "mfs")
    assert alone == with_spouse


def test_standard_payment():
    assert calculate_10_year_standard_payment(120_000, 0.0) == 1_000
    assert 2_800 < calculate_10_year_standard_payment(250_000, 0.065) < 2_900


def test_amortization_payment_zero_rate():
    assert calculate_amortization_payment(84_000, 0.0, 7) == 1_000


def test_effective_payment_capped_for_paye_only():
    assert get_effective_idr_payment(PAYE, 5_000, 120_000, 0.0) == 1_000
    assert get_effective_idr_payment(ICR, 5_000, 120_000, 0.0) == 5_000


# ── Loan balance ────────────────────────────────────────────────────

def test_first_year_starts_at_initial_balance():
    states = project_loan_balance(300_000, 0.065, [6_000] * 5, PAYE)
    assert states[0].starting_balance == 300_000
    assert len(states) == 5


def test_unpaid_interest_capitalises_without_subsidy():
    states = project_loan_balance(100_000, 0.06, [0], PAYE)
    assert states[0].ending_balance > states[0].starting_balance
    assert states[0].interest_subsidized == 0


def test_subsidy_holds_balance_flat():
    states = project_loan_balance(100_000, 0.06, [0], SAVE)
    assert states[0].ending_balance == 100_000
    assert states[0].interest_subsidized == 6_000


def test_schedule_stops_once_paid_off():
    states = project_loan_balance(1_000, 0.0, [1_200, 1_200, 1_200], PAYE)
    assert len(states) == 1
    assert states[0].ending_balance == 0


def test_cumulative_payments_accumulate():
    states = project_loan_balance(300_000, 0.065, [6_000, 7_000], PAYE)
    assert [s.cumulative_payments for s in states] == [6_000, 13_000]


# ── NPV ─────────────────────────────────────────────────────────────

def test_npv_is_below_undiscounted_sum():
    npv = calculate_npv([1_000] * 10, discount_rate=0.05)
    assert npv < 10_000
    assert npv == 7_722


def test_npv_discounts_first_payment_one_year():
    assert calculate_npv([1_000], discount_rate=0.05) == 952


def test_npv_adds_discounted_forgiveness_tax():
    assert calculate_npv([], 10, 1_000, 0.05) == 614


def test_npv_ignores_tax_without_forgiveness_year():
    assert calculate_npv([], 0, 1_000, 0.05) == 0


# ── Aggressive payoff ───────────────────────────────────────────────

def test_training_phase_is_interest_only():
    result = calculate_aggressive_payoff(AggressivePayoffParams(
        loan_balance=200_000,
        interest_rate=0.06,
        training_years_remaining=2,
        attending_salary=400_000,
        living_expenses=100_000,
        aggressive_years=5,
    ))
    first = result.yearly_breakdown[0]
    assert first.phase == "training"
    assert first.starting_balance == first.ending_balance == 200_000
    assert first.interest == 12_000
    assert result.monthly_payment_training == 1_000
    assert result.yearly_breakdown[-1].ending_balance == 0


def test_aggressive_phase_pays_surplus_income():
    result = calculate_aggressive_payoff(AggressivePayoffParams(
        loan_balance=100_000,
        interest_rate=0.0,
        training_years_remaining=2,
        attending_salary=300_000,
        living_expenses=110_000,
        aggressive_years=3,
    ))
    # 300k * 70% - 110k = 100k a year
    assert result.monthly_payment_aggressive == 8_333
    assert [y.phase for y in result.yearly_breakdown] == ["training", "training", "aggressive"]
    assert result.years_to_payoff == 3
    assert result.months_to_payoff == 36
    assert result.total_payments == 100_000
    assert result.total_interest == 0
    assert result.monthly_payment_standard == 0


def test_standard_phase_clears_what_aggressive_leaves():
    result = calculate_aggressive_payoff(AggressivePayoffParams(
        loan_balance=150_000,
        interest_rate=0.065,
        training_years_remaining=0,
        attending_salary=200_000,
        living_expenses=200_000,
        aggressive_years=1,
    ))
    phases = [y.phase for y in result.yearly_breakdown]
    assert result.monthly_payment_training == 0
    assert result.monthly_payment_aggressive == 0
    assert result.monthly_payment_standard > 0
    assert phases[0] == "aggressive"
    assert phases.count("standard") == 10
    assert result.yearly_breakdown[-1].ending_balance == 0
    assert result.total_payments == pytest.approx(150_000 + result.total_interest, abs=2)


def test_aggressive_npv_below_total_payments():
    result = calculate_aggressive_payoff(AggressivePayoffParams(
        loan_balance=250_000,
        interest_rate=0.07,
        training_years_remaining=3,
        attending_salary=450_000,
        living_expenses=120_000,
        aggressive_years=3,
    ))
    assert 0 < result.npv < result.total_payments


def test_larger_family_never_pays_more():
    payments = [calculate_idr_payment(PAYE, 90_000, n) for n in range(1, 7)]
    assert payments == sorted(payments, reverse=True)
