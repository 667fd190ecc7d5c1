"""Sensitivity solver - minimal change that flips Don't Buy into Buy

Each lever mutates exactly one raw input (a FinancialProfile field or the
purchase cost) and leaves everything else fixed. Trials are built with
dataclasses.replace on frozen models, so every trial is an isolated copy and
the derived FinancialSummary is recomputed from the mutated raw fields before
rescoring.
"""

import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional
from purchase_advisor.domain.models import FlipSuggestion, FlipSuggestions, PurchaseInput
from purchase_advisor.domain.scoring import BUY_THRESHOLD, calculate_decision_scores, weights_for
from purchase_advisor.utils.money import format_usd, round_to_nearest

BISECTION_ITERATIONS = 18
MAX_INCOME_SHARE = 0.8
EMERGENCY_FUND_TARGET_MONTHS = 6

USD = "USD"
USD_PER_MONTH = "USD_per_month"


@dataclass(frozen=True)
class Lever:
    """One independently adjustable input"""

    name: str
    unit: str
    step: float
    needs_profile: bool
    upper_bound: Callable[[PurchaseInput], float]
    cap: Callable[[PurchaseInput], float]
    apply: Callable[[PurchaseInput, float], PurchaseInput]


def _with_profile(purchase: PurchaseInput, **changes) -> PurchaseInput:
    return replace(purchase, financial_profile=replace(purchase.financial_profile, **changes))


def _savings_bound(p: PurchaseInput) -> float:
    return max(p.cost, EMERGENCY_FUND_TARGET_MONTHS * p.financial_profile.monthly_expenses)


def _income_bound(p: PurchaseInput) -> float:
    profile = p.financial_profile
    return min(max(p.cost, 2 * profile.debt_payments), MAX_INCOME_SHARE * profile.monthly_income)


def _expense_bound(p: PurchaseInput) -> float:
    profile = p.financial_profile
    return min(profile.monthly_expenses, MAX_INCOME_SHARE * profile.monthly_income)


LEVERS: List[Lever] = [
    Lever(
        name="savingsBoost",
        unit=USD,
        step=50,
        needs_profile=True,
        upper_bound=_savings_bound,
        cap=_savings_bound,
        apply=lambda p, d: _with_profile(p, current_savings=p.financial_profile.current_savings + d),
    ),
    Lever(
        name="debtReduction",
        unit=USD_PER_MONTH,
        step=10,
        needs_profile=True,
        upper_bound=lambda p: p.financial_profile.debt_payments,
        cap=lambda p: p.financial_profile.debt_payments,
        apply=lambda p, d: _with_profile(p, debt_payments=max(0.0, p.financial_profile.debt_payments - d)),
    ),
    Lever(
        name="incomeIncrease",
        unit=USD_PER_MONTH,
        step=10,
        needs_profile=True,
        upper_bound=_income_bound,
        cap=lambda p: MAX_INCOME_SHARE * p.financial_profile.monthly_income,
        apply=lambda p, d: _with_profile(p, monthly_income=p.financial_profile.monthly_income + d),
    ),
    Lever(
        name="expenseCut",
        unit=USD_PER_MONTH,
        step=10,
        needs_profile=True,
        upper_bound=_expense_bound,
        cap=lambda p: p.financial_profile.monthly_expenses,
        apply=lambda p, d: _with_profile(p, monthly_expenses=max(0.0, p.financial_profile.monthly_expenses - d)),
    ),
    Lever(
        name="priceCut",
        unit=USD,
        step=50,
        needs_profile=False,
        upper_bound=lambda p: p.cost,
        cap=lambda p: p.cost,
        apply=lambda p, d: replace(p, cost=max(0.0, p.cost - d)),
    ),
]

LEVERS_BY_NAME: Dict[str, Lever] = {lever.name: lever for lever in LEVERS}


def months_to_goal(amount: float, monthly_surplus: float) -> Optional[int]:
    """Months needed to self-fund an amount; None when there is no surplus"""
    if monthly_surplus <= 0:
        return None
    return math.ceil(amount / monthly_surplus)


def _flips(purchase: PurchaseInput, lever: Lever, delta: float, weights: Dict[str, float]) -> bool:
    trial = lever.apply(purchase, delta)
    return calculate_decision_scores(trial, weights).final_score >= BUY_THRESHOLD


def find_minimal_delta(
    purchase: PurchaseInput,
    lever: Lever,
    weights: Optional[Dict[str, float]] = None,
) -> Optional[float]:
    """
    Smallest rounded change to one lever that reaches the Buy threshold.

    Returns None when the lever is infeasible: no profile to adjust, nothing
    to adjust (zero bound), or even the extreme bound stays below threshold.
    Bisection is run only after the extreme bound passes, so the search
    interval always brackets the crossing point.
    """
    if lever.needs_profile and purchase.financial_profile is None:
        return None
    if weights is None:
        weights = weights_for(purchase)

    upper = lever.upper_bound(purchase)
    if upper <= 0 or not _flips(purchase, lever, upper, weights):
        return None

    lo, hi = 0.0, upper
    for _ in range(BISECTION_ITERATIONS):
        mid = (lo + hi) / 2
        if _flips(purchase, lever, mid, weights):
            hi = mid
        else:
            lo = mid

    # Rounding to the nearest step can land just under the crossing point,
    # in which case the next step up is used.
    cap = lever.cap(purchase)
    rounded = min(round_to_nearest(hi, lever.step), cap)
    for candidate in (rounded, min(rounded + lever.step, cap)):
        if candidate > 0 and _flips(purchase, lever, candidate, weights):
            return candidate
    return upper


def describe_suggestion(purchase: PurchaseInput, lever: Lever, delta: float) -> FlipSuggestion:
    """Turn a lever delta into a user-facing suggestion"""
    amount = format_usd(delta)
    timeline = None

    if lever.name == "savingsBoost":
        timeline = months_to_goal(delta, purchase.financial_profile.summary.monthly_surplus)
        message = f"Build your savings by {amount} before buying."
        if timeline is not None:
            message += f" At your current monthly surplus that takes about {timeline} months."
    elif lever.name == "debtReduction":
        message = f"Lower your monthly debt payments by {amount}/month."
    elif lever.name == "incomeIncrease":
        message = f"Increase your monthly income by {amount}/month."
    elif lever.name == "expenseCut":
        message = f"Cut your monthly expenses by {amount}/month."
    else:
        target = format_usd(max(0.0, purchase.cost - delta))
        message = f"Find it for {amount} less ({target} or below) and it becomes a Buy."

    return FlipSuggestion(
        lever=lever.name,
        delta=delta,
        unit=lever.unit,
        message=message,
        timeline_months=timeline,
    )


def solve_flip(purchase: PurchaseInput, final_score: Optional[float] = None) -> FlipSuggestions:
    """
    Compute flip suggestions for a Don't Buy purchase.

    Path A is the smallest feasible one-time change (savings or price), or
    failing that the smallest recurring monthly change. Path B is the price
    cut on its own, offered whenever it is feasible. A purchase that already
    scores Buy gets no suggestions.
    """
    weights = weights_for(purchase)
    if final_score is None:
        final_score = calculate_decision_scores(purchase, weights).final_score
    if final_score >= BUY_THRESHOLD:
        return FlipSuggestions()

    candidates: List[FlipSuggestion] = []
    for lever in LEVERS:
        delta = find_minimal_delta(purchase, lever, weights)
        if delta is not None:
            candidates.append(describe_suggestion(purchase, lever, delta))

    one_time = [s for s in candidates if s.unit == USD]
    recurring = [s for s in candidates if s.unit == USD_PER_MONTH]

    path_a = None
    if one_time:
        path_a = min(one_time, key=lambda s: s.delta)
    elif recurring:
        path_a = min(recurring, key=lambda s: s.delta)

    path_b = next((s for s in candidates if s.lever == "priceCut"), None)

    return FlipSuggestions(path_a=path_a, path_b=path_b, candidates=candidates)
