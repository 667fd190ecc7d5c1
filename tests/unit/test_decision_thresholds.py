import pytest
from purchase_advisor.domain.scoring import BUY_THRESHOLD, determine_confidence, determine_decision


def test_buy_threshold_boundary():
    assert BUY_THRESHOLD == 60
    assert determine_decision(59.999) == "Don't Buy"
    assert determine_decision(60.000) == "Buy"
    assert determine_decision(0) == "Don't Buy"
    assert determine_decision(100) == "Buy"


@pytest.mark.parametrize(
    "score,expected",
    [
        (100, "High"),
        (80, "High"),
        (79.99, "Medium"),
        (65, "Medium"),
        (64.99, "Low"),
        (50, "Low"),
        (35.01, "Low"),
        (35, "Medium"),
        (20.01, "Medium"),
        (20, "High"),
        (0, "High"),
    ],
)
def test_confidence_bands(score, expected):
    assert determine_confidence(score) == expected
