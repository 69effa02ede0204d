"""
Projection engine for the Med Debt Optimizer.

Turns a career description into an income path, sizes income-driven
and amortized payments, amortizes the loan month by month, and
discounts payment streams to present value. Also hosts the
three-phase aggressive payoff model (training, aggressive, standard).

Everything here is a pure function of its inputs; year loops (<=30
steps) and month loops are plain Python, discounting is vectorised
with numpy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

import config as cfg
from specialties import get_specialty


LOAN_TYPES = ("direct_unsub", "direct_sub", "direct_plus", "ffel", "perkins")
RISK_TOLERANCES = ("low", "medium", "high")

_PAID_OFF = 0.01


# ─── Input Data Classes ──────────────────────────────────────────────

@dataclass(frozen=True)
class LoanPortfolio:
    """The borrower's federal loans, blended into one balance."""

    total_balance: float
    weighted_interest_rate: float          # decimal, e.g. 0.065 for 6.5%
    loan_types: Tuple[str, ...] = ("direct_unsub",)
    pslf_qualifying_payments: int = 0      # 0-120
    idr_qualifying_payments: int = 0       # 0-300

    def __post_init__(self) -> None:
        if self.total_balance < 0:
            raise ValueError("Loan balance cannot be negative")
        if self.weighted_interest_rate < 0:
            raise ValueError("Interest rate cannot be negative (use a decimal, e.g. 0.065)")
        if not 0 <= self.pslf_qualifying_payments <= cfg.PSLF_REQUIRED_PAYMENTS:
            raise ValueError("PSLF qualifying payments must be 0-120")
        if not 0 <= self.idr_qualifying_payments <= 300:
            raise ValueError("IDR qualifying payments must be 0-300")
        unknown = [t for t in self.loan_types if t not in LOAN_TYPES]
        if unknown:
            raise ValueError(f"Unknown loan type(s): {', '.join(unknown)}")


@dataclass(frozen=True)
class PersonalInfo:
    """Household income and tax situation."""

    agi: float
    spouse_agi: float = 0.0
    filing_status: str = "single"          # 'single', 'mfj' or 'mfs'
    family_size: int = 1
    state: str = "CA"                      # two-letter code
    pslf_eligible_employer: bool = False

    def __post_init__(self) -> None:
        if self.filing_status not in cfg.FILING_STATUSES:
            raise ValueError("Filing status must be 'single', 'mfj' or 'mfs'")
        if self.family_size < 1:
            raise ValueError("Family size must be at least 1")


@dataclass(frozen=True)
class CareerInfo:
    """Where the borrower is in training and what they will earn after."""

    specialty: str
    current_stage: str                     # 'ms4', 'pgy1'..'pgy7', 'fellow', 'attending'
    training_years_remaining: int
    expected_attending_salary: Optional[float] = None   # overrides specialty median

    def __post_init__(self) -> None:
        if self.training_years_remaining < 0:
            raise ValueError("Training years remaining cannot be negative")

    def attending_salary(self) -> float:
        return self.expected_attending_salary or get_specialty(self.specialty).median_attending_salary


@dataclass(frozen=True)
class Preferences:
    """Modelling assumptions chosen by the borrower."""

    discount_rate: float = cfg.DISCOUNT_RATE
    pslf_confidence: float = cfg.PSLF_CONFIDENCE   # belief the program survives
    save_plan_available: bool = cfg.SAVE_PLAN_AVAILABLE
    risk_tolerance: str = "medium"

    def __post_init__(self) -> None:
        if self.discount_rate <= -1:
            raise ValueError("Discount rate must be greater than -100%")
        if not 0.0 <= self.pslf_confidence <= 1.0:
            raise ValueError("PSLF confidence must be between 0 and 1")
        if self.risk_tolerance not in RISK_TOLERANCES:
            raise ValueError("Risk tolerance must be 'low', 'medium' or 'high'")


@dataclass(frozen=True)
class UserInputs:
    """Everything one comparison run needs."""

    loans: LoanPortfolio
    personal: PersonalInfo
    career: CareerInfo
    preferences: Preferences = field(default_factory=Preferences)


# ─── Output Data Classes ─────────────────────────────────────────────

@dataclass(frozen=True)
class IncomeYear:
    year: int                 # 0-indexed
    income: float
    stage: str                # training stage or 'attending'


@dataclass(frozen=True)
class YearlyLoanState:
    """One year of a loan's life under a strategy."""

    year: int                 # 1-indexed
    starting_balance: float
    interest_accrued: float
    payments_made: float
    ending_balance: float
    interest_subsidized: float
    cumulative_payments: float


@dataclass(frozen=True)
class AggressivePayoffParams:
    loan_balance: float
    interest_rate: float
    training_years_remaining: int
    attending_salary: float
    living_expenses: float
    aggressive_years: int
    discount_rate: float = cfg.DISCOUNT_RATE

    def __post_init__(self) -> None:
        if self.loan_balance < 0:
            raise ValueError("Loan balance cannot be negative")
        if self.interest_rate < 0:
            raise ValueError("Interest rate cannot be negative")
        if self.training_years_remaining < 0 or self.aggressive_years < 0:
            raise ValueError("Year counts cannot be negative")


@dataclass(frozen=True)
class AggressiveYear:
    """One year of the aggressive payoff schedule, tagged with its phase."""

    year: int
    phase: str                # 'training', 'aggressive' or 'standard'
    starting_balance: float
    payment: float
    principal: float
    interest: float
    ending_balance: float


@dataclass(frozen=True)
class AggressivePayoffResult:
    total_payments: float
    total_interest: float
    years_to_payoff: int
    months_to_payoff: int
    npv: float
    yearly_breakdown: List[AggressiveYear] = field(repr=False)
    monthly_payment_training: float
    monthly_payment_aggressive: float
    monthly_payment_standard: float


# ─── Income Projection ───────────────────────────────────────────────

def project_income(
    career: CareerInfo,
    years: int,
    growth_rate: float = cfg.INCOME_GROWTH_RATE,
) -> List[IncomeYear]:
    """Year-by-year income through the rest of training and beyond.

    Training years step through the stage ordering (staying on
    ``fellow`` once it runs out) and grow from year 0. Attending years
    grow from the attending base starting at the transition year.
    An unknown ``current_stage`` starts at the first stage.
    """
    order = cfg.TRAINING_STAGE_ORDER
    try:
        start = order.index(career.current_stage)
    except ValueError:
        start = 0

    training = career.training_years_remaining
    attending_base = career.attending_salary()

    projection: List[IncomeYear] = []
    for year in range(years):
        if year < training:
            stage = order[min(start + year, len(order) - 1)]
            base = cfg.TRAINING_SALARIES.get(stage) or cfg.TRAINING_SALARIES["fellow"]
            income = base * (1 + growth_rate) ** year
        else:
            stage = "attending"
            income = attending_base * (1 + growth_rate) ** (year - training)
        projection.append(IncomeYear(year=year, income=round(income), stage=stage))

    return projection


def income_for_year(projection: Sequence[IncomeYear], year: int) -> float:
    """Income in *year*, clamped to the last projected year."""
    if not projection:
        return 0.0
    return projection[min(year, len(projection) - 1)].income


# ─── Payment Calculators ─────────────────────────────────────────────

def get_poverty_line(family_size: int) -> float:
    return cfg.POVERTY_LINE_BASE + max(0, family_size - 1) * cfg.POVERTY_LINE_PER_PERSON


def calculate_idr_payment(
    plan: cfg.IDRPlanParams,
    agi: float,
    family_size: int,
    spouse_agi: float = 0.0,
    filing_status: str = "single",
) -> float:
    """Monthly payment under an IDR plan's discretionary-income formula.

    Married filing separately counts the borrower's income only; every
    other status counts the household.
    """
    income = agi if filing_status == "mfs" else agi + spouse_agi
    shielded = get_poverty_line(family_size) * plan.poverty_line_multiplier
    discretionary = max(0.0, income - shielded)
    return max(0, round(discretionary * plan.discretionary_income_percent / 12))


def annuity_payment(principal: float, annual_rate: float, months: int) -> float:
    """Unrounded level monthly payment that retires *principal* in *months*."""
    if months <= 0:
        return principal
    r = annual_rate / 12
    if r == 0:
        return principal / months
    growth = (1 + r) ** months
    return principal * (r * growth) / (growth - 1)


def amortized_balance(
    principal: float,
    annual_rate: float,
    monthly_payment: float,
    months: int,
) -> float:
    """Closed-form balance left after *months* level payments (floored at 0)."""
    r = annual_rate / 12
    if r == 0:
        return max(principal - monthly_payment * months, 0.0)
    growth = (1 + r) ** months
    return max(principal * growth - monthly_payment * (growth - 1) / r, 0.0)


def calculate_amortization_payment(principal: float, annual_rate: float, years: int) -> float:
    """Fixed monthly payment for a fully amortizing loan."""
    return round(annuity_payment(principal, annual_rate, years * 12))


def calculate_10_year_standard_payment(balance: float, interest_rate: float) -> float:
    """Standard 10-year plan payment, used as the cap for PAYE/IBR."""
    return round(annuity_payment(balance, interest_rate, cfg.STANDARD_TERM_MONTHS))


def get_effective_idr_payment(
    plan: cfg.IDRPlanParams,
    calculated_payment: float,
    balance: float,
    interest_rate: float,
) -> float:
    if plan.caps_payment_at_10_year_standard:
        return min(calculated_payment, calculate_10_year_standard_payment(balance, interest_rate))
    return calculated_payment


# ─── Loan Balance Projection ─────────────────────────────────────────

def project_loan_balance(
    initial_balance: float,
    interest_rate: float,
    annual_payments: Sequence[float],
    plan: cfg.IDRPlanParams,
) -> List[YearlyLoanState]:
    """Amortize month by month under a plan's rules.

    Under an interest-subsidy plan, a month whose payment does not cover
    the interest leaves the balance flat and books the shortfall as
    subsidized. The schedule stops after the first year that ends at a
    zero balance, even if more payments were supplied.
    """
    states: List[YearlyLoanState] = []
    balance = float(initial_balance)
    monthly_rate = interest_rate / 12
    cumulative = 0.0

    for y, annual_payment in enumerate(annual_payments):
        start = balance
        monthly_payment = annual_payment / 12
        accrued = 0.0
        subsidized = 0.0

        for _ in range(12):
            interest = balance * monthly_rate
            accrued += interest
            if plan.interest_subsidy and monthly_payment < interest:
                subsidized += interest - monthly_payment
            else:
                balance = max(balance + interest - monthly_payment, 0.0)

        cumulative += annual_payment
        states.append(YearlyLoanState(
            year=y + 1,
            starting_balance=round(start),
            interest_accrued=round(accrued),
            payments_made=round(annual_payment),
            ending_balance=round(balance),
            interest_subsidized=round(subsidized),
            cumulative_payments=round(cumulative),
        ))

        if balance <= 0:
            break

    return states


# ─── Net Present Value ───────────────────────────────────────────────

def calculate_npv(
    annual_payments: Sequence[float],
    forgiveness_year: int = 0,
    tax_on_forgiveness: float = 0.0,
    discount_rate: float = cfg.DISCOUNT_RATE,
) -> float:
    """Present value of a payment stream plus a one-off forgiveness tax.

    Payment ``y`` (0-indexed) is discounted ``y + 1`` years; the tax is
    discounted to ``forgiveness_year``. Lower is better.
    """
    payments = np.asarray(annual_payments, dtype=float)
    discount = (1 + discount_rate) ** np.arange(1, len(payments) + 1)
    npv = float(np.sum(payments / discount))

    if tax_on_forgiveness > 0 and forgiveness_year > 0:
        npv += tax_on_forgiveness / (1 + discount_rate) ** forgiveness_year

    return round(npv)


# ─── Aggressive Payoff ───────────────────────────────────────────────

def calculate_aggressive_payoff(params: AggressivePayoffParams) -> AggressivePayoffResult:
    """Three-phase payoff: interest-only training, surplus-income blitz, standard remainder.

    Phase 1 pays only interest on the full balance while in training.
    Phase 2 throws take-home pay (flat 30% effective tax) above living
    expenses at the loan for ``aggressive_years`` or until it is gone.
    Phase 3 amortizes anything left over a standard 10-year schedule.
    This path never forgives, so its NPV carries no tax event.

    Parameters
    ----------
    params : AggressivePayoffParams
        Loan, salary and lifestyle assumptions.

    Returns
    -------
    AggressivePayoffResult
        Totals accumulated across all phases plus a per-year breakdown.
    """
    monthly_rate = params.interest_rate / 12
    balance = float(params.loan_balance)

    breakdown: List[AggressiveYear] = []
    annual_payments: List[float] = []
    total_interest = 0.0
    months = 0

    def run_year(phase: str, monthly_payment: float) -> None:
        nonlocal balance, total_interest, months
        start = balance
        paid = 0.0
        interest = 0.0
        for _ in range(12):
            if balance <= _PAID_OFF:
                break
            accrued = balance * monthly_rate
            payment = min(monthly_payment, balance + accrued)
            balance = balance + accrued - payment
            paid += payment
            interest += accrued
            months += 1
        if balance <= _PAID_OFF:
            balance = 0.0

        total_interest += interest
        annual_payments.append(paid)
        breakdown.append(AggressiveYear(
            year=len(breakdown) + 1,
            phase=phase,
            starting_balance=round(start),
            payment=round(paid),
            principal=round(paid - interest),
            interest=round(interest),
            ending_balance=round(balance),
        ))

    # ── Phase 1: training, interest only ────────────────────────
    training_monthly = balance * monthly_rate if params.training_years_remaining > 0 else 0.0
    for _ in range(int(params.training_years_remaining)):
        if balance <= _PAID_OFF:
            break
        run_year("training", training_monthly)

    # ── Phase 2: aggressive surplus payoff ──────────────────────
    take_home = params.attending_salary * (1 - cfg.AGGRESSIVE_EFFECTIVE_TAX_RATE)
    aggressive_monthly = max(0.0, take_home - params.living_expenses) / 12
    for _ in range(int(params.aggressive_years)):
        if balance <= _PAID_OFF:
            break
        run_year("aggressive", aggressive_monthly)

    # ── Phase 3: standard 10-year remainder ─────────────────────
    standard_monthly = 0.0
    if balance > _PAID_OFF:
        standard_monthly = annuity_payment(
            balance, params.interest_rate, cfg.AGGRESSIVE_STANDARD_TERM_YEARS * 12,
        )
        for _ in range(cfg.AGGRESSIVE_STANDARD_TERM_YEARS):
            if balance <= _PAID_OFF:
                break
            run_year("standard", standard_monthly)

    return AggressivePayoffResult(
        total_payments=round(sum(annual_payments)),
        total_interest=round(total_interest),
        years_to_payoff=len(breakdown),
        months_to_payoff=months,
        npv=calculate_npv(annual_payments, 0, 0, params.discount_rate),
        yearly_breakdown=breakdown,
        monthly_payment_training=round(training_monthly),
        monthly_payment_aggressive=round(aggressive_monthly),
        monthly_payment_standard=round(standard_monthly),
    )
