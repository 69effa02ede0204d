"""
Reference data for the Med Debt Optimizer.

All monetary values in USD. Poverty guideline and tax brackets are the
2024 figures; training salaries are national averages. Update annually.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ── Federal Poverty Guidelines (HHS, 48 contiguous states) ───────────
POVERTY_LINE_BASE = 15_060
POVERTY_LINE_PER_PERSON = 5_380


# ── IDR Plan Parameters ──────────────────────────────────────────────

@dataclass(frozen=True)
class IDRPlanParams:
    """Static parameters of one income-driven repayment plan."""

    name: str
    discretionary_income_percent: float   # share of discretionary income
    poverty_line_multiplier: float        # x poverty line shielded
    forgiveness_years: int                # years until balance forgiven
    interest_subsidy: bool                # unpaid interest covered
    caps_payment_at_10_year_standard: bool
    undergraduate_rate: Optional[float] = None  # SAVE only


IDR_PLANS = {
    "SAVE": IDRPlanParams(
        name="SAVE (Saving on a Valuable Education)",
        discretionary_income_percent=0.10,
        poverty_line_multiplier=2.25,
        forgiveness_years=25,
        interest_subsidy=True,
        caps_payment_at_10_year_standard=False,
        undergraduate_rate=0.05,
    ),
    "PAYE": IDRPlanParams(
        name="PAYE (Pay As You Earn)",
        discretionary_income_percent=0.10,
        poverty_line_multiplier=1.50,
        forgiveness_years=20,
        interest_subsidy=False,
        caps_payment_at_10_year_standard=True,
    ),
    "IBR_NEW": IDRPlanParams(
        name="IBR (New Borrowers after 2014)",
        discretionary_income_percent=0.10,
        poverty_line_multiplier=1.50,
        forgiveness_years=20,
        interest_subsidy=False,
        caps_payment_at_10_year_standard=True,
    ),
    "IBR_OLD": IDRPlanParams(
        name="IBR (Borrowers before 2014)",
        discretionary_income_percent=0.15,
        poverty_line_multiplier=1.50,
        forgiveness_years=25,
        interest_subsidy=False,
        caps_payment_at_10_year_standard=True,
    ),
    "ICR": IDRPlanParams(
        name="ICR (Income-Contingent Repayment)",
        discretionary_income_percent=0.20,
        poverty_line_multiplier=1.00,
        forgiveness_years=25,
        interest_subsidy=False,
        caps_payment_at_10_year_standard=False,
    ),
}


# ── Resident / Fellow Salary Progression ─────────────────────────────
TRAINING_SALARIES = {
    "ms4": 0,
    "pgy1": 64_000,
    "pgy2": 66_000,
    "pgy3": 69_000,
    "pgy4": 72_000,
    "pgy5": 75_000,
    "pgy6": 78_000,
    "pgy7": 81_000,
    "fellow": 85_000,
}

# Order a trainee advances through; the last entry repeats once exhausted.
TRAINING_STAGE_ORDER = (
    "pgy1", "pgy2", "pgy3", "pgy4", "pgy5", "pgy6", "pgy7", "fellow",
)

TRAINING_STAGES = ("ms4",) + TRAINING_STAGE_ORDER + ("attending",)


# ── Federal Income Tax (2024) ────────────────────────────────────────
# Bands: (upper limit, rate). Last band has no upper limit (use inf).
FEDERAL_BRACKETS_SINGLE = [
    (11_600, 0.10),
    (47_150, 0.12),
    (100_525, 0.22),
    (191_950, 0.24),
    (243_725, 0.32),
    (609_350, 0.35),
    (float("inf"), 0.37),
]

FEDERAL_BRACKETS_MFJ = [
    (23_200, 0.10),
    (94_300, 0.12),
    (201_050, 0.22),
    (383_900, 0.24),
    (487_450, 0.32),
    (731_200, 0.35),
    (float("inf"), 0.37),
]

FEDERAL_BRACKETS_MFS = [
    (11_600, 0.10),
    (47_150, 0.12),
    (100_525, 0.22),
    (191_950, 0.24),
    (243_725, 0.32),
    (365_600, 0.35),
    (float("inf"), 0.37),
]

FEDERAL_BRACKETS = {
    "single": FEDERAL_BRACKETS_SINGLE,
    "mfj": FEDERAL_BRACKETS_MFJ,
    "mfs": FEDERAL_BRACKETS_MFS,
}

FILING_STATUSES = ("single", "mfj", "mfs")


# ── State Income Tax (simplified top marginal rate) ──────────────────
STATE_TAX_RATES = {
    "AL": 0.05, "AK": 0.0, "AZ": 0.025, "AR": 0.047, "CA": 0.133,
    "CO": 0.044, "CT": 0.0699, "DE": 0.066, "FL": 0.0, "GA": 0.0549,
    "HI": 0.11, "ID": 0.058, "IL": 0.0495, "IN": 0.0315, "IA": 0.06,
    "KS": 0.057, "KY": 0.04, "LA": 0.0425, "ME": 0.0715, "MD": 0.0575,
    "MA": 0.09, "MI": 0.0425, "MN": 0.0985, "MS": 0.05, "MO": 0.048,
    "MT": 0.059, "NE": 0.0584, "NV": 0.0, "NH": 0.05, "NJ": 0.1075,
    "NM": 0.059, "NY": 0.109, "NC": 0.0475, "ND": 0.0225, "OH": 0.035,
    "OK": 0.0475, "OR": 0.099, "PA": 0.0307, "RI": 0.0599, "SC": 0.064,
    "SD": 0.0, "TN": 0.0, "TX": 0.0, "UT": 0.0465, "VT": 0.0875,
    "VA": 0.0575, "WA": 0.0, "WV": 0.055, "WI": 0.0765, "WY": 0.0,
    "DC": 0.105,
}
DEFAULT_STATE_TAX_RATE = 0.05     # unknown state code


# ── Default Assumptions ──────────────────────────────────────────────
DISCOUNT_RATE = 0.05
INCOME_GROWTH_RATE = 0.03
INFLATION_RATE = 0.025
PSLF_CONFIDENCE = 0.85
SAVE_PLAN_AVAILABLE = False      # currently enjoined
PROJECTION_YEARS = 30

# Refinance candidates offered by the comparator: (rate, term years)
REFI_RATE = 0.055
REFI_TERM_YEARS = 10
REFI_OPTIONS = [
    (0.055, 10),
    (0.06, 7),
]

STANDARD_TERM_MONTHS = 120


# ── Quick Analysis Defaults ──────────────────────────────────────────
QUICK_INTEREST_RATE = 0.065
QUICK_STATE = "CA"               # high-tax state for a conservative estimate
QUICK_FALLBACK_AGI = 65_000


# ── PSLF ─────────────────────────────────────────────────────────────
PSLF_REQUIRED_PAYMENTS = 120
PSLF_UNDERLYING_PLAN = "PAYE"
PSLF_HEDGE_CONFIDENCE = 0.80     # risk warning below this


# ── Aggressive Payoff ────────────────────────────────────────────────
AGGRESSIVE_EFFECTIVE_TAX_RATE = 0.30
AGGRESSIVE_STANDARD_TERM_YEARS = 10


# ── Recommendation Thresholds ────────────────────────────────────────
DTI_LOW = 0.5
DTI_HIGH = 1.5
PSLF_LOW_CONFIDENCE = 0.70
CLOSE_CALL_NPV_GAP = 10_000
ALTERNATIVE_NPV_GAP = 25_000
TAX_BOMB_THRESHOLD = 50_000

HIGH_INCOME_SPECIALTIES = (
    "orthopedic_surgery",
    "cardiology",
    "gastroenterology",
    "neurosurgery",
    "dermatology",
)
