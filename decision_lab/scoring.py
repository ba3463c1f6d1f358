# decision_lab/scoring.py
"""Deterministic make/buy/partner scoring.

Each framework answer maps to a (recommendation, confidence, reasoning)
triple through a fixed rule table; the triples are then blended into a
confidence-weighted percentage split. This is the fallback path used when
the AI collaborator is disabled or fails, so it never performs I/O and
never raises on well-formed input.
"""
import math
from typing import Callable, Iterable

import structlog

from decision_lab.models import (
    INCONCLUSIVE,
    AdditionalAnswer,
    BargainingAnswer,
    CompetitionAnswer,
    Decision,
    FinalAnalysis,
    FrameworkAnswers,
    FrameworkId,
    FrameworkRecommendation,
    HoldUpRiskAnswer,
    TechnologyAnswer,
    TechnologyPhase,
    TimeHorizon,
    TransactionCostAnswer,
    Verdict,
    WeightedResult,
)

logger = structlog.get_logger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────
HIGH = 4  # slider value (or mean) treated as "high"
LOW = 2  # slider value (or mean) treated as "low"
CONFLICT_SPREAD = 20  # max-min below this means the split is a judgment call
FALLBACK_SPLIT = WeightedResult(make=33, buy=33, partner=34)

# Ties resolve in this order.
DECISION_ORDER = (Decision.MAKE, Decision.BUY, Decision.PARTNER)

FRAMEWORK_NAMES: dict[FrameworkId, str] = {
    FrameworkId.COMPETITION: "Competition",
    FrameworkId.TECHNOLOGY: "Technology",
    FrameworkId.TRANSACTION_COST: "Transaction Costs",
    FrameworkId.HOLD_UP_RISK: "Hold-Up Risk",
    FrameworkId.BARGAINING: "Bargaining",
    FrameworkId.ADDITIONAL: "Additional",
}


def _mean(*values: int) -> float:
    return sum(values) / len(values)


def _verdict(
    framework: FrameworkId, recommendation: Verdict, confidence: int, reasoning: str
) -> FrameworkRecommendation:
    return FrameworkRecommendation(
        framework=FRAMEWORK_NAMES[framework],
        recommendation=recommendation,
        confidence=confidence,
        reasoning=reasoning,
    )


# ── Per-framework rules ───────────────────────────────────────────────────────
# First matching branch wins.

def score_competition(answer: CompetitionAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.COMPETITION
    perf, cost = answer.performance_pressure, answer.cost_pressure

    if perf >= HIGH and cost < HIGH:
        return _verdict(fid, Decision.MAKE, 75, "High performance pressure favors in-house control")
    if cost >= HIGH and perf < HIGH:
        return _verdict(fid, Decision.BUY, 70, "Cost pressure suggests leveraging external efficiency")
    if perf >= HIGH and cost >= HIGH:
        return _verdict(fid, Decision.PARTNER, 65, "Balanced pressures suggest partnership")
    return _verdict(fid, INCONCLUSIVE, 50, "Low pressures make this dimension less decisive")


def score_technology(answer: TechnologyAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.TECHNOLOGY
    phase, threat = answer.current_phase, answer.emerging_threat

    if phase == TechnologyPhase.EARLY and not threat:
        return _verdict(fid, Decision.MAKE, 80, "Early-stage technology benefits from in-house learning")
    if phase == TechnologyPhase.PLATEAU or threat:
        return _verdict(fid, Decision.PARTNER, 70, "Technology uncertainty favors flexible arrangements")
    return _verdict(fid, Decision.BUY, 65, "Mature technology can be efficiently sourced")


def score_transaction_cost(answer: TransactionCostAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.TRANSACTION_COST
    tce = _mean(answer.asset_specificity, answer.uncertainty, answer.frequency)

    if tce >= HIGH:
        return _verdict(fid, Decision.MAKE, 78, "High TCE factors favor hierarchy")
    if tce <= LOW:
        return _verdict(fid, Decision.BUY, 72, "Low TCE factors favor market transactions")
    return _verdict(fid, Decision.PARTNER, 60, "Moderate TCE suggests hybrid governance")


def score_hold_up_risk(answer: HoldUpRiskAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.HOLD_UP_RISK
    risk = _mean(answer.switching_costs, answer.relationship_specificity, answer.information_asymmetry)

    if risk >= HIGH:
        return _verdict(fid, Decision.MAKE, 82, "High hold-up risk justifies vertical integration")
    if risk <= LOW:
        return _verdict(fid, Decision.BUY, 68, "Low hold-up risk makes outsourcing safe")
    return _verdict(fid, Decision.PARTNER, 55, "Moderate risk can be managed through partnerships")


def bargaining_position(answer: BargainingAnswer) -> float:
    """Net negotiating leverage on a 1-5 scale.

    Supplier power and urgency weaken our hand, so they are inverted
    (``6 - value``); our alternatives strengthen it.
    """
    return _mean(6 - answer.supplier_power, answer.buyer_alternatives, 6 - answer.urgency)


def score_bargaining(answer: BargainingAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.BARGAINING
    position = bargaining_position(answer)

    if position >= HIGH:
        return _verdict(fid, Decision.BUY, 70, "Strong position enables favorable market terms")
    if position <= LOW:
        return _verdict(fid, Decision.MAKE, 75, "Weak position suggests reducing external dependency")
    return _verdict(fid, Decision.PARTNER, 58, "Balanced position works for partnership")


def score_additional(answer: AdditionalAnswer) -> FrameworkRecommendation:
    fid = FrameworkId.ADDITIONAL
    horizon, gap = answer.time_horizon, answer.capability_gap

    if horizon == TimeHorizon.SHORT or gap >= HIGH:
        return _verdict(fid, Decision.PARTNER, 60, "Time or capability constraints favor partnerships")
    if horizon == TimeHorizon.LONG and gap <= LOW:
        return _verdict(fid, Decision.MAKE, 65, "Long horizon with capability supports in-house")
    if answer.optionality >= HIGH:
        return _verdict(fid, Decision.BUY, 55, "High optionality need favors flexible sourcing")
    return _verdict(fid, INCONCLUSIVE, 50, "Mixed signals from additional factors")


SCORERS: dict[FrameworkId, Callable[..., FrameworkRecommendation]] = {
    FrameworkId.COMPETITION: score_competition,
    FrameworkId.TECHNOLOGY: score_technology,
    FrameworkId.TRANSACTION_COST: score_transaction_cost,
    FrameworkId.HOLD_UP_RISK: score_hold_up_risk,
    FrameworkId.BARGAINING: score_bargaining,
    FrameworkId.ADDITIONAL: score_additional,
}


def score_frameworks(answers: FrameworkAnswers) -> list[FrameworkRecommendation]:
    """Score every completed framework; unanswered ones are left out entirely."""
    results = []
    for framework, scorer in SCORERS.items():
        answer = answers.answer_for(framework)
        if answer.completed:
            results.append(scorer(answer))
    return results


# ── Aggregation ───────────────────────────────────────────────────────────────

def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def decision_weights(results: Iterable[FrameworkRecommendation]) -> dict[Decision, int]:
    """Sum of confidences per decision; inconclusive results carry no weight."""
    weights = {decision: 0 for decision in DECISION_ORDER}
    for result in results:
        if result.recommendation == INCONCLUSIVE:
            continue
        weights[Decision(result.recommendation)] += result.confidence
    return weights


def split_weights(weights: dict[Decision, int]) -> WeightedResult:
    """Percentage split for per-decision weights, 33/33/34 when all are zero."""
    total = sum(weights.values())
    if total == 0:
        return FALLBACK_SPLIT

    return WeightedResult(
        **{d.value: _round_half_up(weights[d] / total * 100) for d in DECISION_ORDER}
    )


def weigh_recommendations(results: Iterable[FrameworkRecommendation]) -> WeightedResult:
    """Confidence-weighted percentage split across the three decisions.

    Buckets are rounded independently and never renormalised, so the
    split may sum to 99 or 101. With no decisive framework the fixed
    33/33/34 split is returned.
    """
    return split_weights(decision_weights(results))


def pick_primary(weighted: WeightedResult) -> Decision:
    """Largest share wins; ties go to make, then buy."""
    top = max(weighted.share(d) for d in DECISION_ORDER)
    return next(d for d in DECISION_ORDER if weighted.share(d) == top)


def is_conflicting(weighted: WeightedResult) -> bool:
    """True when the three shares sit close together (spread < 20)."""
    shares = [weighted.share(d) for d in DECISION_ORDER]
    return max(shares) - min(shares) < CONFLICT_SPREAD


def aggregate(results: list[FrameworkRecommendation]) -> FinalAnalysis:
    weights = decision_weights(results)
    weighted = split_weights(weights)
    if not any(weights.values()):
        # Every decision is tied at zero weight; the fallback split's
        # uneven 34 does not count as a lead.
        primary = DECISION_ORDER[0]
    else:
        primary = pick_primary(weighted)

    return FinalAnalysis(
        framework_results=results,
        weighted_result=weighted,
        primary_recommendation=primary,
        conflicting_frameworks=is_conflicting(weighted),
        feedback=[],
    )


def compute_analysis(answers: FrameworkAnswers) -> FinalAnalysis:
    """Score the completed frameworks and blend them into one verdict."""
    analysis = aggregate(score_frameworks(answers))

    logger.info(
        "local_analysis_computed",
        frameworks=[r.framework for r in analysis.framework_results],
        weighted=analysis.weighted_result.model_dump(),
        primary=analysis.primary_recommendation.value,
        conflicting=analysis.conflicting_frameworks,
    )
    return analysis
