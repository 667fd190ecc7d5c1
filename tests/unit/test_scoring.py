"""Unit tests for the decision aggregator"""

import pytest
from purchase_advisor.domain.models import BUY, DONT_BUY, Alternative, FinancialProfile, PurchaseInput
from purchase_advisor.domain.scoring import (
    calculate_decision_scores,
    calculate_final_score,
    score_criteria,
)
from purchase_advisor.domain.weights import build_criterion_weights


def test_buy_decision_for_affordable_daily_essential(toothbrush_purchase):
    """
    $100 health item used daily, $3500/month net, 8 months of savings.

    Weighted points: affordability 15, value 8, opportunity 8, goal 3,
    necessity 9, frequency 10, longevity 6, emotional 2.5, social 3.5,
    remorse 5, financial risk 5, alternatives 4 = 79.0
    """
    analysis = calculate_decision_scores(toothbrush_purchase)

    assert analysis.final_score == pytest.approx(79.0)
    assert analysis.decision == BUY
    assert analysis.confidence == "Medium"


def test_dont_buy_decision_for_unaffordable_laptop(laptop_purchase):
    """$1000 laptop against $500/month net income: affordability and remorse drag it to 55.5"""
    analysis = calculate_decision_scores(laptop_purchase)

    assert analysis.final_score == pytest.approx(55.5)
    assert analysis.decision == DONT_BUY
    assert analysis.confidence == "Low"
    assert analysis.scores["affordability"].score == 0
    assert analysis.scores["buyersRemorse"].score == 2


def test_weighted_score_is_score_times_weight(laptop_purchase):
    analysis = calculate_decision_scores(laptop_purchase)
    necessity = analysis.scores["necessity"]

    assert necessity.score == 9
    assert necessity.weighted_score == pytest.approx(9 * necessity.weight)


def test_final_score_divides_by_actual_weight_sum(laptop_purchase):
    """Scaling every weight by the same factor leaves the final score unchanged"""
    weights = build_criterion_weights("moderate")
    inflated = {criterion_id: w * 1.3 for criterion_id, w in weights.items()}

    baseline = calculate_final_score(score_criteria(laptop_purchase, weights))
    drifted = calculate_final_score(score_criteria(laptop_purchase, inflated))

    assert drifted == pytest.approx(baseline)


def test_risk_tolerance_changes_weights_not_scores(laptop_purchase):
    from dataclasses import replace

    cautious = replace(
        laptop_purchase,
        financial_profile=replace(laptop_purchase.financial_profile, risk_tolerance="low"),
    )

    moderate_analysis = calculate_decision_scores(laptop_purchase)
    cautious_analysis = calculate_decision_scores(cautious)

    assert cautious_analysis.scores["financialRisk"].weight > moderate_analysis.scores["financialRisk"].weight
    assert cautious_analysis.scores["financialRisk"].score == moderate_analysis.scores["financialRisk"].score


def test_no_financial_profile_still_produces_analysis():
    """Missing financial data falls back to neutral scores instead of failing"""
    analysis = calculate_decision_scores(PurchaseInput(item_name="Mystery box", cost=40))

    assert analysis.scores["affordability"].score == 5
    assert analysis.scores["financialRisk"].score == 5
    assert 0 <= analysis.final_score <= 100
    assert analysis.decision in (BUY, DONT_BUY)


@pytest.mark.parametrize("risk_tolerance", ["low", "moderate", "high", None])
@pytest.mark.parametrize(
    "profile",
    [
        FinancialProfile(0, 0, 0, 0),
        FinancialProfile(2000, 2500, 600, 0),
        FinancialProfile(12000, 3000, 500, 50000, financial_goal="invest"),
    ],
)
@pytest.mark.parametrize("cost", [0, 25, 800, 25000])
def test_scores_and_final_score_stay_in_range(risk_tolerance, profile, cost):
    from dataclasses import replace

    purchase = PurchaseInput(
        item_name="Gift tool",
        cost=cost,
        purpose="impulse investment, everyone has one",
        frequency="One-time",
        financial_profile=replace(profile, risk_tolerance=risk_tolerance),
        alternative=Alternative(name="Used one", price=cost / 3),
    )

    analysis = calculate_decision_scores(purchase)

    assert all(0 <= c.score <= 10 for c in analysis.scores.values())
    assert 0 <= analysis.final_score <= 100
    assert sum(c.weight for c in analysis.scores.values()) == pytest.approx(1.0)


def test_summary_is_recomputed_from_raw_fields(tight_budget_profile):
    """Changing a raw field changes the derived summary immediately"""
    from dataclasses import replace

    richer = replace(tight_budget_profile, monthly_income=4000)

    assert tight_budget_profile.summary.monthly_net_income == 500
    assert richer.summary.monthly_net_income == 1500


def test_summary_metrics():
    summary = FinancialProfile(4000, 1000, 1000, 6000).summary

    assert summary.monthly_net_income == 2000
    assert summary.debt_to_income_ratio == pytest.approx(25.0)
    assert summary.emergency_fund_months == pytest.approx(3.0)
    assert summary.monthly_surplus == 2000


def test_summary_with_no_outgoings():
    assert FinancialProfile(3000, 0, 0, 0).summary.emergency_fund_months == 0
    assert FinancialProfile(3000, 0, 0, 500).summary.emergency_fund_months == float("inf")
    assert FinancialProfile(0, 100, 0, 0).summary.debt_to_income_ratio == 0
