"""Tests for the local feedback generator."""
import pytest

from decision_lab.feedback import LEARNING_POINT, compute_local_feedback
from decision_lab.models import Decision, FeedbackKind


@pytest.mark.parametrize("stance", list(Decision))
@pytest.mark.parametrize("primary", list(Decision))
def test_always_three_items_in_fixed_order(stance, primary):
    items = compute_local_feedback(stance, "some reasoning", primary)

    assert [item.type for item in items] == [
        FeedbackKind.STRENGTH,
        FeedbackKind.CONSIDERATION,
        FeedbackKind.CONSIDERATION,
    ]
    assert items[2].description == LEARNING_POINT


def test_matching_stance_praises_alignment():
    strength, revealed, _ = compute_local_feedback(Decision.BUY, "cheap vendors", Decision.BUY)

    assert strength.title == "Your instinct aligned with systematic analysis"
    assert "BUY" in strength.description
    assert "reinforcing your initial thinking" in revealed.description


def test_diverging_stance_names_divergent_factors():
    strength, revealed, _ = compute_local_feedback(Decision.MAKE, "control matters", Decision.PARTNER)

    assert strength.title == "You engaged thoughtfully with the problem"
    assert "PARTNER" in revealed.description
    for factor in ("transaction costs", "hold-up risk", "bargaining"):
        assert factor in revealed.description


def test_reasoning_text_does_not_change_output():
    first = compute_local_feedback(Decision.MAKE, "short", Decision.BUY)
    second = compute_local_feedback(Decision.MAKE, "a much longer and entirely different rationale", Decision.BUY)
    assert first == second
