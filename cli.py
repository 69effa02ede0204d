"""
CLI interface and display helpers for the Med Debt Optimizer.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional

import config as cfg
from simulation import (
    AggressivePayoffParams,
    AggressivePayoffResult,
    calculate_aggressive_payoff,
)
from specialties import all_specialty_keys, get_specialty
from strategies import (
    QuickAnalysis,
    QuickStartInputs,
    Recommendation,
    StrategyResult,
    calculate_training_remaining,
    run_quick_analysis,
)
from utils import format_currency, parse_numeric_value


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float) -> str:
    return format_currency(val)


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


def _wrap(text: str, width: int) -> List[str]:
    lines: List[str] = []
    line = ""
    for word in text.split():
        if len(line) + len(word) + 1 <= width:
            line = f"{line} {word}" if line else word
        else:
            lines.append(line)
            line = word
    if line:
        lines.append(line)
    return lines


# ═══════════════════════════════════════════════════════════════════
# Input collection
# ═══════════════════════════════════════════════════════════════════

def _prompt_amount(
    label: str,
    default: Any,
    min_val: Optional[float] = None,
) -> float:
    """Dollar amounts accept separators and a leading ``$``."""
    while True:
        raw = input(f"  {label} [{default}]: ").strip().lstrip("$")
        if not raw:
            raw = str(default).lstrip("$")
        val = parse_numeric_value(raw)
        if val is None:
            print("    Invalid number, try again.")
            continue
        if min_val is not None and val < min_val:
            print(f"    Must be at least {fmt(min_val)}")
            continue
        return val


def _prompt_int(
    label: str,
    default: int,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    while True:
        raw = input(f"  {label} [{default}]: ").strip()
        if not raw:
            return default
        try:
            val = int(float(raw.replace(",", "")))
            if min_val is not None and val < min_val:
                print(f"    Must be at least {min_val}")
                continue
            if max_val is not None and val > max_val:
                print(f"    Must be at most {max_val}")
                continue
            return val
        except ValueError:
            print("    Invalid number, try again.")


def _prompt_choice(label: str, options: List[str], default: str) -> str:
    opts = "/".join(options)
    while True:
        raw = input(f"  {label} ({opts}) [{default}]: ").strip().lower()
        if not raw:
            return default
        if raw in options:
            return raw
        print(f"    Choose from: {opts}")


def _prompt_specialty(default: str = "internal_medicine") -> str:
    keys = all_specialty_keys()
    while True:
        raw = input(f"  Specialty (type ? to list) [{default}]: ").strip().lower()
        if not raw:
            return default
        if raw == "?":
            for key in keys:
                print(f"    {key:<24}{get_specialty(key).name}")
            continue
        if raw in keys:
            return raw
        print("    Unknown specialty, type ? to list them.")


def collect_inputs() -> QuickStartInputs:
    """Prompt the user for the quick-start answers."""
    print("\n  Enter your details (press Enter for defaults):\n")

    debt = _prompt_amount("Total student debt", "$300,000", 0)
    specialty = _prompt_specialty()
    stage = _prompt_choice("Current stage", list(cfg.TRAINING_STAGES), "pgy1")
    pslf = _prompt_choice("PSLF-eligible employer?", ["yes", "no"], "yes")
    married = _prompt_choice("Married?", ["yes", "no"], "no")
    spouse = None
    if married == "yes":
        spouse = _prompt_amount("Spouse annual income", "$0", 0)

    return QuickStartInputs(
        total_debt=debt,
        specialty=specialty,
        pslf_eligible=pslf == "yes",
        current_stage=stage,
        married=married == "yes",
        spouse_income=spouse,
    )


def collect_aggressive_inputs(quick: QuickStartInputs) -> Optional[AggressivePayoffParams]:
    """Optionally prompt for the aggressive payoff scenario."""
    print()
    choice = _prompt_choice("Also model aggressive payoff?", ["yes", "no"], "no")
    if choice != "yes":
        return None

    specialty = get_specialty(quick.specialty)
    salary = _prompt_amount(
        "Attending salary", fmt(specialty.median_attending_salary), 0,
    )
    living = _prompt_amount("Annual living expenses", "$80,000", 0)
    years = _prompt_int("Years of aggressive payoff", 3, 0, 30)

    return AggressivePayoffParams(
        loan_balance=quick.total_debt,
        interest_rate=cfg.QUICK_INTEREST_RATE,
        training_years_remaining=calculate_training_remaining(
            quick.current_stage, specialty.typical_training_years,
        ),
        attending_salary=salary,
        living_expenses=living,
        aggressive_years=years,
    )


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)

_H = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    title = title[:inner - 2]
    return (
        f"╔{_H * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{_H * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{_H * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_inputs(quick: QuickStartInputs) -> None:
    specialty = get_specialty(quick.specialty)
    rows = [
        _box_row("Total student debt", fmt(quick.total_debt)),
        _box_row("Specialty", specialty.name),
        _box_row("Current stage", quick.current_stage),
        _box_row("Training years remaining", str(calculate_training_remaining(
            quick.current_stage, specialty.typical_training_years,
        ))),
        _box_row("Median attending salary", fmt(specialty.median_attending_salary)),
        _box_row("PSLF-eligible employer", "yes" if quick.pslf_eligible else "no"),
        _box_row("Filing status", "married filing jointly" if quick.married else "single"),
    ]
    if quick.married:
        rows.append(_box_row("Spouse income", fmt(quick.spouse_income or 0)))
    rows += [
        _box_line(),
        _box_row("Assumed interest rate", pct(cfg.QUICK_INTEREST_RATE * 100)),
        _box_row("Assumed state", cfg.QUICK_STATE),
        _box_row("Discount rate", pct(cfg.DISCOUNT_RATE * 100)),
    ]
    _print_section("YOUR SITUATION", rows)


def _print_ranking(results: List[StrategyResult]) -> None:
    h1 = f"{'#':>2}  {'Strategy':<28}{'NPV':>11}{'Total paid':>12}{'Years':>7}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]
    for i, r in enumerate(results, start=1):
        rows.append(_box_line(
            f"{i:>2}  {r.strategy_name:<28}{fmt(r.npv):>11}"
            f"{fmt(r.total_payments):>12}{r.total_years:>7}"
        ))
    _print_section("STRATEGIES RANKED BY NPV", rows)


def _print_strategy(r: StrategyResult) -> None:
    rng = r.monthly_payment_range
    if rng.min == rng.max:
        monthly = fmt(rng.min)
    else:
        monthly = f"{fmt(rng.min)} - {fmt(rng.max)}"

    rows = [
        _box_row("Monthly payment", monthly),
        _box_row("Total payments", fmt(r.total_payments)),
        _box_row("Amount forgiven", fmt(r.forgiveness_amount)),
        _box_row("Tax on forgiveness", fmt(r.tax_on_forgiveness)),
        _box_row("Net present value", fmt(r.npv)),
        _box_row("Years", str(r.total_years)),
        _box_line(),
    ]
    rows.extend(_box_line(f"+ {b}") for b in r.benefits)
    rows.extend(_box_line(f"- {k}") for k in r.risks)
    _print_section(f"{r.strategy_name}: {r.description}", rows)


def _print_recommendation(rec: Recommendation) -> None:
    m = rec.key_metrics
    rows = [
        _box_row("Recommended", rec.primary_strategy.strategy_name),
        _box_row("Confidence", rec.confidence.upper()),
    ]
    if rec.alternative_strategy is not None:
        rows.append(_box_row("Close alternative", rec.alternative_strategy.strategy_name))
    rows += [
        _box_line(),
        _box_row("Debt-to-income ratio", f"{m.debt_to_income_ratio:g}"),
        _box_row("Savings vs refinancing (NPV)", fmt(m.total_savings_vs_refi)),
        _box_row("Forgiveness benefit after tax", fmt(m.forgiveness_benefit)),
    ]

    premium = m.pslf_salary_premium
    if premium is not None:
        rows += [
            _box_line(),
            _box_row("PSLF NPV advantage", fmt(premium.pslf_npv_benefit)),
            _box_row("Raise needed to leave PSLF job", f"{fmt(premium.annual_premium_required)}/yr"),
            _box_row("  per month", fmt(premium.monthly_premium_required)),
            _box_row("  at marginal rate", pct(premium.effective_marginal_rate * 100)),
        ]

    rows.append(_box_line())
    for reason in rec.reasoning:
        for i, line in enumerate(_wrap(reason, W - 8)):
            rows.append(_box_line(("* " if i == 0 else "  ") + line))

    _print_section("RECOMMENDATION", rows)


def _print_aggressive(result: AggressivePayoffResult) -> None:
    rows = [
        _box_row("Monthly payment (training)", fmt(result.monthly_payment_training)),
        _box_row("Monthly payment (aggressive)", fmt(result.monthly_payment_aggressive)),
        _box_row("Monthly payment (standard)", fmt(result.monthly_payment_standard)),
        _box_line(),
        _box_row("Total payments", fmt(result.total_payments)),
        _box_row("Total interest", fmt(result.total_interest)),
        _box_row("Paid off in", f"{result.years_to_payoff} years ({result.months_to_payoff} months)"),
        _box_row("Net present value", fmt(result.npv)),
        _box_line(),
    ]

    h1 = f"{'Year':>4}  {'Phase':<11}{'Start':>11}{'Paid':>11}{'Interest':>10}{'End':>11}"
    rows += [_box_line(h1), _box_line("─" * (W - 6))]
    for y in result.yearly_breakdown:
        rows.append(_box_line(
            f"{y.year:>4}  {y.phase:<11}{fmt(y.starting_balance):>11}"
            f"{fmt(y.payment):>11}{fmt(y.interest):>10}{fmt(y.ending_balance):>11}"
        ))
    _print_section("AGGRESSIVE PAYOFF", rows)


def print_analysis(analysis: QuickAnalysis) -> None:
    _print_ranking(analysis.results)
    for r in analysis.results:
        _print_strategy(r)
    _print_recommendation(analysis.recommendation)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli() -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError, ValueError):
        pass
    print()
    print("=" * W)
    print("  Med Debt Optimizer: Student Loan Strategy Comparison")
    print("=" * W)

    quick = collect_inputs()
    aggressive = collect_aggressive_inputs(quick)

    print("\n  Comparing strategies...")
    analysis = run_quick_analysis(quick)
    print("  Done.\n")

    _print_inputs(quick)
    print_analysis(analysis)

    if aggressive is not None:
        _print_aggressive(calculate_aggressive_payoff(aggressive))


if __name__ == "__main__":
    run_cli()
