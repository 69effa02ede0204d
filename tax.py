"""
US tax calculation functions for the Med Debt Optimizer.

The federal bracket walk accepts numpy arrays so several incomes can be
taxed in one call. Scalar inputs work too (promoted internally).
State tax is a flat top-marginal approximation.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

import config as cfg


# ─── Helpers ─────────────────────────────────────────────────────────

def _brackets(filing_status: str) -> List[Tuple[float, float]]:
    """Bracket table for a filing status; anything unknown files as single."""
    return cfg.FEDERAL_BRACKETS.get(filing_status, cfg.FEDERAL_BRACKETS_SINGLE)


def _federal_tax_unrounded(taxable_income, filing_status: str) -> np.ndarray:
    taxable_income = np.maximum(np.asarray(taxable_income, dtype=float), 0.0)

    tax = np.zeros_like(taxable_income)
    prev_upper = 0.0
    for upper, rate in _brackets(filing_status):
        if np.isinf(upper):
            in_band = np.maximum(taxable_income - prev_upper, 0.0)
        else:
            in_band = np.clip(taxable_income - prev_upper, 0.0, upper - prev_upper)
        tax += in_band * rate
        prev_upper = upper
    return tax


# ─── Federal Income Tax ──────────────────────────────────────────────

def federal_tax(taxable_income, filing_status: str = "single") -> np.ndarray:
    """Progressive federal income tax.

    Parameters
    ----------
    taxable_income : array_like
        Annual taxable income.
    filing_status : str
        ``'single'`` (default), ``'mfj'`` or ``'mfs'``.

    Returns
    -------
    np.ndarray
        Tax due for each income value, rounded to whole dollars.
    """
    return np.round(_federal_tax_unrounded(taxable_income, filing_status))


def marginal_federal_rate(income: float, filing_status: str = "single") -> float:
    """Federal marginal rate at *income*, measured with a $1 delta."""
    t = _federal_tax_unrounded(np.array([income, income + 1.0]), filing_status)
    return float(t[1] - t[0])


# ─── State Income Tax ────────────────────────────────────────────────

def state_tax_rate(state: str) -> float:
    """Top marginal state rate; unknown codes fall back to 5%."""
    return cfg.STATE_TAX_RATES.get(state, cfg.DEFAULT_STATE_TAX_RATE)


def effective_marginal_rate(
    income: float,
    filing_status: str = "single",
    state: str = "",
) -> float:
    """Combined federal marginal + flat state rate on the next dollar."""
    return marginal_federal_rate(income, filing_status) + state_tax_rate(state)


# ─── Tax on Forgiveness ──────────────────────────────────────────────

def estimate_tax_on_forgiveness(
    forgiven_amount: float,
    agi_in_forgiveness_year: float,
    state: str,
    filing_status: str = "single",
) -> float:
    """Tax bill triggered by IDR forgiveness counted as ordinary income.

    Federal tax is the increment between the year's income with and
    without the forgiven amount stacked on top. State tax applies the
    state's flat top rate to the whole forgiven amount.

    Parameters
    ----------
    forgiven_amount : float
        Balance forgiven at the end of the plan.
    agi_in_forgiveness_year : float
        Income in the year forgiveness is granted.
    state : str
        Two-letter state code.
    filing_status : str
        ``'single'``, ``'mfj'`` or ``'mfs'``.

    Returns
    -------
    float
        Estimated combined tax, rounded to whole dollars.
    """
    if forgiven_amount <= 0:
        return 0

    t = federal_tax(
        np.array([agi_in_forgiveness_year, agi_in_forgiveness_year + forgiven_amount]),
        filing_status,
    )
    fed = float(t[1] - t[0])
    state_tax = forgiven_amount * state_tax_rate(state)
    return round(fed + state_tax)
