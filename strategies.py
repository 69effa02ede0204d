"""
Strategy comparison and recommendation for the Med Debt Optimizer.

Each strategy family (PSLF, an IDR plan, a private refinance) turns the
shared income projection into a ``StrategyResult``. The comparator runs
every applicable strategy and ranks them by NPV; the recommender reads
the ranking and explains it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

import config as cfg
import tax
from simulation import (
    IncomeYear,
    LoanPortfolio,
    CareerInfo,
    PersonalInfo,
    Preferences,
    UserInputs,
    YearlyLoanState,
    amortized_balance,
    annuity_payment,
    calculate_amortization_payment,
    calculate_idr_payment,
    calculate_npv,
    get_effective_idr_payment,
    income_for_year,
    project_income,
    project_loan_balance,
)
from specialties import get_specialty
from utils import format_currency

logger = logging.getLogger(__name__)


# ─── Data Classes ────────────────────────────────────────────────────

@dataclass(frozen=True)
class PaymentRange:
    min: float
    max: float


@dataclass(frozen=True)
class StrategyResult:
    """Outcome of following one repayment strategy to the end."""

    strategy_name: str
    description: str
    total_payments: float
    forgiveness_amount: float
    tax_on_forgiveness: float
    npv: float                                 # ranking criterion, lower wins
    total_years: int
    monthly_payment_range: PaymentRange
    yearly_breakdown: List[YearlyLoanState] = field(repr=False)
    risks: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)

    @property
    def is_refinance(self) -> bool:
        return self.strategy_name.startswith("Refinance")


@dataclass(frozen=True)
class PSLFSalaryPremiumResult:
    """Extra salary a non-PSLF job must pay to match the PSLF path."""

    annual_premium_required: float
    monthly_premium_required: float
    pslf_npv_benefit: float
    effective_marginal_rate: float
    annuity_factor: float


@dataclass(frozen=True)
class KeyMetrics:
    debt_to_income_ratio: float
    total_savings_vs_refi: float
    forgiveness_benefit: float
    pslf_salary_premium: Optional[PSLFSalaryPremiumResult] = None


@dataclass(frozen=True)
class Recommendation:
    primary_strategy: StrategyResult
    alternative_strategy: Optional[StrategyResult]
    confidence: str                            # 'high', 'medium' or 'low'
    reasoning: List[str]
    key_metrics: KeyMetrics


@dataclass(frozen=True)
class FilingCost:
    total_tax: float
    loan_payment: float                        # annual
    net_annual_cost: float


@dataclass(frozen=True)
class FilingComparison:
    mfj: FilingCost
    mfs: FilingCost
    recommendation: str                        # 'mfj' or 'mfs'
    annual_savings: float


@dataclass(frozen=True)
class QuickStartInputs:
    """The handful of answers the quick analysis asks for."""

    total_debt: float
    specialty: str
    pslf_eligible: bool
    current_stage: str
    married: bool
    spouse_income: Optional[float] = None


@dataclass(frozen=True)
class QuickAnalysis:
    results: List[StrategyResult]
    recommendation: Recommendation


# ─── Helpers ─────────────────────────────────────────────────────────

def _idr_payment_stream(
    inputs: UserInputs,
    projection: Sequence[IncomeYear],
    plan: cfg.IDRPlanParams,
    years: int,
) -> Tuple[List[float], List[float]]:
    """Annual payments and the monthly payment behind each, year by year."""
    annual: List[float] = []
    monthly: List[float] = []
    for year in range(years):
        payment = calculate_idr_payment(
            plan,
            income_for_year(projection, year),
            inputs.personal.family_size,
            inputs.personal.spouse_agi,
            inputs.personal.filing_status,
        )
        effective = get_effective_idr_payment(
            plan, payment, inputs.loans.total_balance, inputs.loans.weighted_interest_rate,
        )
        monthly.append(effective)
        annual.append(effective * 12)
    return annual, monthly


def _payment_range(monthly: Sequence[float]) -> PaymentRange:
    if not monthly:
        return PaymentRange(min=0, max=0)
    return PaymentRange(min=min(monthly), max=max(monthly))


def _remaining_balance(breakdown: Sequence[YearlyLoanState], initial_balance: float) -> float:
    """Balance left at the end of the schedule; all of it if no years remain."""
    if not breakdown:
        return round(initial_balance)
    return breakdown[-1].ending_balance


def get_debt_to_income_ratio(total_debt: float, expected_attending_salary: float) -> float:
    return round(total_debt / expected_attending_salary * 100) / 100


# ─── Strategy Calculators ────────────────────────────────────────────

def calculate_pslf_strategy(
    inputs: UserInputs,
    projection: Sequence[IncomeYear],
    underlying_plan: str = cfg.PSLF_UNDERLYING_PLAN,
) -> StrategyResult:
    """Income-driven payments until 120 qualifying payments, then tax-free forgiveness."""
    plan = cfg.IDR_PLANS[underlying_plan]
    payments_remaining = cfg.PSLF_REQUIRED_PAYMENTS - inputs.loans.pslf_qualifying_payments
    years = max(0, math.ceil(payments_remaining / 12))

    annual, monthly = _idr_payment_stream(inputs, projection, plan, years)
    breakdown = project_loan_balance(
        inputs.loans.total_balance, inputs.loans.weighted_interest_rate, annual, plan,
    )

    risks = [
        "Requires continuous employment at PSLF-eligible employer",
        "Must recertify employment annually",
        "Program could be modified by future legislation",
    ]
    confidence = inputs.preferences.pslf_confidence
    if confidence < cfg.PSLF_HEDGE_CONFIDENCE:
        risks.append(f"Your confidence level ({round(confidence * 100)}%) suggests hedging")

    return StrategyResult(
        strategy_name="PSLF",
        description=f"Public Service Loan Forgiveness using {plan.name} payments",
        total_payments=round(sum(annual)),
        forgiveness_amount=_remaining_balance(breakdown, inputs.loans.total_balance),
        tax_on_forgiveness=0,
        npv=calculate_npv(annual, years, 0, inputs.preferences.discount_rate),
        total_years=years,
        monthly_payment_range=_payment_range(monthly),
        yearly_breakdown=breakdown,
        risks=risks,
        benefits=[
            "Forgiveness is completely tax-free",
            "Lowest total cost for most high-debt physicians",
            "Payments based on income, not debt",
            "All residency/fellowship years count toward 120 payments",
        ],
    )


def calculate_idr_strategy(
    inputs: UserInputs,
    projection: Sequence[IncomeYear],
    plan_name: str,
) -> StrategyResult:
    """Stay on an IDR plan until its forgiveness horizon; forgiveness is taxed."""
    plan = cfg.IDR_PLANS[plan_name]
    years = max(0, plan.forgiveness_years - int(inputs.loans.idr_qualifying_payments // 12))

    annual, monthly = _idr_payment_stream(inputs, projection, plan, years)
    breakdown = project_loan_balance(
        inputs.loans.total_balance, inputs.loans.weighted_interest_rate, annual, plan,
    )
    forgiven = _remaining_balance(breakdown, inputs.loans.total_balance)

    tax_bill = tax.estimate_tax_on_forgiveness(
        forgiven,
        income_for_year(projection, max(years - 1, 0)),
        inputs.personal.state,
        inputs.personal.filing_status,
    )
    npv = calculate_npv(annual, years, tax_bill, inputs.preferences.discount_rate)
    if years == 0:
        # horizon already met: forgiven and taxed now, nothing to discount
        npv += tax_bill

    risks = [
        "Forgiveness is taxed as ordinary income (could be $50k-$150k+ tax bill)",
        f"Long repayment period ({plan.forgiveness_years} years)",
        "Balance may grow significantly during training years",
    ]
    benefits = [
        "Payments based on income, not debt amount",
        "No employer restrictions",
    ]
    if plan_name == "SAVE":
        risks.append("SAVE plan currently enjoined by litigation - may not be available")
        benefits.append("Government covers unpaid interest (if available)")
    benefits.append("Can switch to PSLF if employment situation changes")

    return StrategyResult(
        strategy_name=plan_name,
        description=plan.name,
        total_payments=round(sum(annual)),
        forgiveness_amount=forgiven,
        tax_on_forgiveness=tax_bill,
        npv=npv,
        total_years=years,
        monthly_payment_range=_payment_range(monthly),
        yearly_breakdown=breakdown,
        risks=risks,
        benefits=benefits,
    )


def calculate_refi_strategy(
    inputs: UserInputs,
    refi_rate: float = cfg.REFI_RATE,
    term_years: int = cfg.REFI_TERM_YEARS,
) -> StrategyResult:
    """Private refinance to a fixed rate; no forgiveness, no tax event.

    The yearly breakdown comes straight from the closed-form amortization
    schedule, there is no subsidy logic to simulate.
    """
    principal = inputs.loans.total_balance
    monthly = calculate_amortization_payment(principal, refi_rate, term_years)
    annual = monthly * 12
    annual_payments = [annual] * term_years

    level = annuity_payment(principal, refi_rate, term_years * 12)
    breakdown: List[YearlyLoanState] = []
    for year in range(1, term_years + 1):
        start = amortized_balance(principal, refi_rate, level, (year - 1) * 12)
        end = amortized_balance(principal, refi_rate, level, year * 12)
        breakdown.append(YearlyLoanState(
            year=year,
            starting_balance=round(start),
            interest_accrued=round(level * 12 - (start - end)),
            payments_made=round(annual),
            ending_balance=round(end),
            interest_subsidized=0,
            cumulative_payments=round(annual * year),
        ))

    return StrategyResult(
        strategy_name=f"Refinance ({term_years}yr @ {refi_rate * 100:.1f}%)",
        description=f"Private refinance to {refi_rate * 100:.1f}% fixed rate, {term_years}-year term",
        total_payments=round(annual * term_years),
        forgiveness_amount=0,
        tax_on_forgiveness=0,
        npv=calculate_npv(annual_payments, 0, 0, inputs.preferences.discount_rate),
        total_years=term_years,
        monthly_payment_range=PaymentRange(min=monthly, max=monthly),
        yearly_breakdown=breakdown,
        risks=[
            "Permanently lose all federal protections",
            "Cannot return to IDR or PSLF after refinancing",
            "No forbearance/deferment options",
            "High monthly payments during training years",
        ],
        benefits=[
            "Lowest total interest paid if income is high",
            "Predictable fixed payments",
            f"Debt-free in {term_years} years",
            "Best for low debt-to-income ratios",
        ],
    )


# ─── Comparison ──────────────────────────────────────────────────────

def compare_all_strategies(inputs: UserInputs) -> List[StrategyResult]:
    """Run every applicable strategy and rank them by NPV (lowest first).

    PSLF is included only for an eligible employer and SAVE only when
    the plan is available. Ties keep their evaluation order.
    """
    projection = project_income(inputs.career, cfg.PROJECTION_YEARS)
    results: List[StrategyResult] = []

    if inputs.personal.pslf_eligible_employer:
        results.append(calculate_pslf_strategy(inputs, projection))

    plans = ["PAYE", "IBR_NEW"]
    if inputs.preferences.save_plan_available:
        plans.insert(0, "SAVE")
    for plan_name in plans:
        results.append(calculate_idr_strategy(inputs, projection, plan_name))

    for rate, term in cfg.REFI_OPTIONS:
        results.append(calculate_refi_strategy(inputs, rate, term))

    for r in results:
        logger.debug(
            "%s: npv=%s total=%s forgiven=%s tax=%s years=%s",
            r.strategy_name, r.npv, r.total_payments,
            r.forgiveness_amount, r.tax_on_forgiveness, r.total_years,
        )

    return sorted(results, key=lambda r: r.npv)


# ─── PSLF Salary Premium ─────────────────────────────────────────────

def calculate_pslf_salary_premium(
    pslf_npv: float,
    best_non_pslf_npv: float,
    pslf_years_remaining: int,
    discount_rate: float,
    attending_salary: float,
    filing_status: str,
    state: str,
) -> PSLFSalaryPremiumResult:
    """Breakeven raise for leaving a PSLF-eligible employer.

    The NPV advantage of PSLF is spread over the PSLF horizon as a level
    annual amount, then grossed up for tax on the extra salary.
    """
    benefit = max(0, best_non_pslf_npv - pslf_npv)
    n = pslf_years_remaining
    r = discount_rate

    if n <= 0:
        annuity = 0.0
    elif r == 0:
        annuity = float(n)
    else:
        annuity = (1 - (1 + r) ** -n) / r

    marginal = tax.effective_marginal_rate(attending_salary, filing_status, state)

    if benefit <= 0 or annuity <= 0 or marginal >= 1:
        annual = 0
    else:
        annual = round(benefit / annuity / (1 - marginal))

    return PSLFSalaryPremiumResult(
        annual_premium_required=annual,
        monthly_premium_required=round(annual / 12),
        pslf_npv_benefit=benefit,
        effective_marginal_rate=round(marginal, 4),
        annuity_factor=round(annuity, 4),
    )


def _pslf_premium_for(
    inputs: UserInputs,
    results: Sequence[StrategyResult],
) -> Optional[PSLFSalaryPremiumResult]:
    pslf = next((r for r in results if r.strategy_name == "PSLF"), None)
    alternative = next((r for r in results if r.strategy_name != "PSLF"), None)
    if pslf is None or alternative is None:
        return None
    return calculate_pslf_salary_premium(
        pslf_npv=pslf.npv,
        best_non_pslf_npv=alternative.npv,
        pslf_years_remaining=pslf.total_years,
        discount_rate=inputs.preferences.discount_rate,
        attending_salary=inputs.career.attending_salary(),
        filing_status=inputs.personal.filing_status,
        state=inputs.personal.state,
    )


# ─── Recommendation ──────────────────────────────────────────────────

def generate_recommendation(
    inputs: UserInputs,
    results: Sequence[StrategyResult],
) -> Recommendation:
    """Pick the lowest-NPV strategy and explain the choice.

    Confidence starts high, drops to medium when PSLF wins but the
    borrower doubts the program, and drops to low on a close call. The
    close-call check runs last so it always wins.

    Parameters
    ----------
    inputs : UserInputs
        The inputs the results were computed from.
    results : sequence of StrategyResult
        Output of :func:`compare_all_strategies`, sorted by NPV.

    Returns
    -------
    Recommendation
    """
    if not results:
        raise ValueError("No strategy results to recommend from")

    dti = get_debt_to_income_ratio(inputs.loans.total_balance, inputs.career.attending_salary())

    best = results[0]
    second = results[1] if len(results) > 1 else None
    npv_gap = second.npv - best.npv if second else 0

    refi = next((r for r in results if r.is_refinance), None)
    savings_vs_refi = refi.npv - best.npv if refi else 0

    reasoning: List[str] = []
    confidence = "high"

    if dti < cfg.DTI_LOW:
        reasoning.append(f"Low debt-to-income ratio ({dti:g}) favors aggressive payoff")
    elif dti > cfg.DTI_HIGH:
        reasoning.append(f"High debt-to-income ratio ({dti:g}) strongly favors forgiveness strategies")
    else:
        reasoning.append(
            f"Moderate debt-to-income ratio ({dti:g}) - outcome depends on employment and preferences"
        )

    if best.strategy_name == "PSLF":
        if inputs.preferences.pslf_confidence < cfg.PSLF_LOW_CONFIDENCE:
            confidence = "medium"
            reasoning.append("PSLF is optimal but your confidence in the program affects certainty")
        if inputs.career.specialty in cfg.HIGH_INCOME_SPECIALTIES:
            reasoning.append(
                "High-income specialty - verify PSLF-eligible employment is achievable and sustainable"
            )
        reasoning.append(f"PSLF saves ~{format_currency(savings_vs_refi)} vs refinancing (NPV)")

    if second is not None and npv_gap < cfg.CLOSE_CALL_NPV_GAP:
        confidence = "low"
        reasoning.append(
            f"Close call: {best.strategy_name} beats {second.strategy_name} "
            f"by only {format_currency(npv_gap)}"
        )

    if best.tax_on_forgiveness > cfg.TAX_BOMB_THRESHOLD:
        reasoning.append(
            f"Warning: {format_currency(best.tax_on_forgiveness)} tax liability "
            f"at forgiveness - start saving now"
        )

    logger.info(
        "Recommending %s (confidence %s, DTI %s, gap to next %s)",
        best.strategy_name, confidence, dti, npv_gap,
    )

    return Recommendation(
        primary_strategy=best,
        alternative_strategy=second if second is not None and npv_gap < cfg.ALTERNATIVE_NPV_GAP else None,
        confidence=confidence,
        reasoning=reasoning,
        key_metrics=KeyMetrics(
            debt_to_income_ratio=dti,
            total_savings_vs_refi=savings_vs_refi,
            forgiveness_benefit=best.forgiveness_amount - best.tax_on_forgiveness,
            pslf_salary_premium=_pslf_premium_for(inputs, results),
        ),
    )


# ─── Filing Status Comparison ────────────────────────────────────────

def compare_filing_status(
    borrower_agi: float,
    spouse_agi: float,
    family_size: int,
    plan: cfg.IDRPlanParams,
    loan_balance: float,
    interest_rate: float,
) -> FilingComparison:
    """Annual loan payment plus federal tax when filing jointly vs separately."""
    mfj_payment = get_effective_idr_payment(
        plan,
        calculate_idr_payment(plan, borrower_agi, family_size, spouse_agi, "mfj"),
        loan_balance,
        interest_rate,
    )
    mfj_tax = float(tax.federal_tax(borrower_agi + spouse_agi, "mfj"))

    mfs_payment = get_effective_idr_payment(
        plan,
        calculate_idr_payment(plan, borrower_agi, family_size, 0, "mfs"),
        loan_balance,
        interest_rate,
    )
    mfs_tax = float(np.sum(tax.federal_tax(np.array([borrower_agi, spouse_agi]), "mfs")))

    mfj = FilingCost(
        total_tax=mfj_tax,
        loan_payment=mfj_payment * 12,
        net_annual_cost=mfj_payment * 12 + mfj_tax,
    )
    mfs = FilingCost(
        total_tax=mfs_tax,
        loan_payment=mfs_payment * 12,
        net_annual_cost=mfs_payment * 12 + mfs_tax,
    )

    return FilingComparison(
        mfj=mfj,
        mfs=mfs,
        recommendation="mfj" if mfj.net_annual_cost <= mfs.net_annual_cost else "mfs",
        annual_savings=abs(mfj.net_annual_cost - mfs.net_annual_cost),
    )


# ─── Quick Analysis ──────────────────────────────────────────────────

def calculate_training_remaining(current_stage: str, typical_years: int) -> int:
    """Years of training left for someone at *current_stage*."""
    if current_stage == "fellow":
        return 1
    if current_stage == "attending":
        return 0
    if current_stage in cfg.TRAINING_STAGE_ORDER:
        return max(0, typical_years - cfg.TRAINING_STAGE_ORDER.index(current_stage))
    return typical_years


def run_quick_analysis(quick: QuickStartInputs) -> QuickAnalysis:
    """Compare strategies from a handful of answers using fixed defaults."""
    specialty = get_specialty(quick.specialty)

    inputs = UserInputs(
        loans=LoanPortfolio(
            total_balance=quick.total_debt,
            weighted_interest_rate=cfg.QUICK_INTEREST_RATE,
            loan_types=("direct_unsub",),
            pslf_qualifying_payments=0,
            idr_qualifying_payments=0,
        ),
        personal=PersonalInfo(
            agi=cfg.TRAINING_SALARIES.get(quick.current_stage) or cfg.QUICK_FALLBACK_AGI,
            spouse_agi=quick.spouse_income or 0,
            filing_status="mfj" if quick.married else "single",
            family_size=2 if quick.married else 1,
            state=cfg.QUICK_STATE,
            pslf_eligible_employer=quick.pslf_eligible,
        ),
        career=CareerInfo(
            specialty=quick.specialty,
            current_stage=quick.current_stage,
            training_years_remaining=calculate_training_remaining(
                quick.current_stage, specialty.typical_training_years,
            ),
        ),
        preferences=Preferences(
            discount_rate=cfg.DISCOUNT_RATE,
            pslf_confidence=cfg.PSLF_CONFIDENCE,
            save_plan_available=cfg.SAVE_PLAN_AVAILABLE,
            risk_tolerance="medium",
        ),
    )

    results = compare_all_strategies(inputs)
    return QuickAnalysis(results=results, recommendation=generate_recommendation(inputs, results))
