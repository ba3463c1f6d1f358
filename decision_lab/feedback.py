# decision_lab/feedback.py
"""Canned feedback used when the AI feedback collaborator is unavailable."""
from decision_lab.models import Decision, FeedbackItem, FeedbackKind

LEARNING_POINT = (
    "Systematic frameworks help surface blind spots and validate intuitions. "
    "Over time, this process builds strategic pattern recognition."
)


def compute_local_feedback(
    stance_decision: Decision,
    stance_reasoning: str,
    primary_recommendation: Decision,
) -> list[FeedbackItem]:
    """Compare the locked initial stance with the blended recommendation.

    Always returns three items: one strength followed by two considerations.
    ``stance_reasoning`` is accepted for parity with the AI collaborator but
    does not change the text.
    """
    matched = stance_decision == primary_recommendation
    stance_label = stance_decision.value.upper()
    recommended = primary_recommendation.value.upper()

    if matched:
        strength = FeedbackItem(
            type=FeedbackKind.STRENGTH,
            title="Your instinct aligned with systematic analysis",
            description=(
                f"Your initial choice of {stance_label} was validated by the frameworks. "
                "This suggests you intuitively recognized key factors that drive this decision."
            ),
        )
        revealed = (
            f"Multiple frameworks pointed toward {recommended}, reinforcing your initial thinking. "
            "The systematic analysis confirmed factors like transaction costs and hold-up risk."
        )
    else:
        strength = FeedbackItem(
            type=FeedbackKind.STRENGTH,
            title="You engaged thoughtfully with the problem",
            description=(
                "Your reasoning shows careful consideration of the strategic context. "
                "The frameworks revealed additional factors that shifted the recommendation."
            ),
        )
        revealed = (
            "The frameworks highlighted factors you may have weighted differently. "
            "Consider how transaction costs, hold-up risk, and bargaining position "
            f"influenced the recommendation toward {recommended}."
        )

    return [
        strength,
        FeedbackItem(
            type=FeedbackKind.CONSIDERATION,
            title="What the frameworks revealed",
            description=revealed,
        ),
        FeedbackItem(
            type=FeedbackKind.CONSIDERATION,
            title="Key learning",
            description=LEARNING_POINT,
        ),
    ]
