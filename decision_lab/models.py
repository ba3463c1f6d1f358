# decision_lab/models.py
"""Pydantic models for the make/buy/partner decision lab.

JSON on the wire uses camelCase keys; Python code uses snake_case.
Range checks live here, at the request boundary; the scoring core trusts
whatever these models let through.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_snake


class CamelModel(BaseModel):
    """Base model serialising to camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable camelCase value object."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ── Enums ─────────────────────────────────────────────────────────────────────

class Decision(str, Enum):
    """The three sourcing outcomes."""
    MAKE = "make"  # vertical integration
    BUY = "buy"  # market sourcing
    PARTNER = "partner"  # collaborative arrangement


INCONCLUSIVE = "inconclusive"

# A single framework may decline to pick a side.
Verdict = Union[Decision, Literal["inconclusive"]]


class FrameworkId(str, Enum):
    """The six strategic lenses, in scoring order."""
    COMPETITION = "competition"
    TECHNOLOGY = "technology"
    TRANSACTION_COST = "transactionCost"
    HOLD_UP_RISK = "holdUpRisk"
    BARGAINING = "bargaining"
    ADDITIONAL = "additional"

    @property
    def field_name(self) -> str:
        """Attribute name on ``FrameworkAnswers``."""
        return to_snake(self.value)


class TechnologyPhase(str, Enum):
    EARLY = "early"
    MATURE = "mature"
    PLATEAU = "plateau"


class TimeHorizon(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class FeedbackKind(str, Enum):
    STRENGTH = "strength"
    CONSIDERATION = "consideration"
    FLAW = "flaw"


SourceType = Literal["text", "pdf", "url", "example"]


def _slider(description: str):
    return Field(..., ge=1, le=5, description=description)


# ── Framework answers ─────────────────────────────────────────────────────────

class CompetitionAnswer(CamelModel):
    performance_pressure: int = _slider("Demand for continuous performance gains (1-5)")
    cost_pressure: int = _slider("Pressure to cut cost (1-5)")
    completed: bool


class TechnologyAnswer(CamelModel):
    current_phase: TechnologyPhase
    emerging_threat: bool
    # Collected by the exercise but not read by any scoring rule.
    investment_level: int = Field(default=3, ge=1, le=5)
    completed: bool


class TransactionCostAnswer(CamelModel):
    asset_specificity: int = _slider("How customised the asset must be (1-5)")
    uncertainty: int = _slider("Environmental uncertainty (1-5)")
    frequency: int = _slider("Transaction frequency (1-5)")
    completed: bool


class HoldUpRiskAnswer(CamelModel):
    switching_costs: int = _slider("Cost of switching partner (1-5)")
    relationship_specificity: int = _slider("Partner-specific investment (1-5)")
    information_asymmetry: int = _slider("Partner's information advantage (1-5)")
    completed: bool


class BargainingAnswer(CamelModel):
    supplier_power: int = _slider("Supplier leverage (1-5)")
    buyer_alternatives: int = _slider("Our sourcing alternatives (1-5)")
    urgency: int = _slider("Time pressure (1-5)")
    completed: bool


class AdditionalAnswer(CamelModel):
    time_horizon: TimeHorizon
    capability_gap: int = _slider("Gap to required capability (1-5)")
    optionality: int = _slider("Value of keeping options open (1-5)")
    completed: bool


class FrameworkAnswers(CamelModel):
    """All six framework answers; ``completed`` marks which ones count."""
    competition: CompetitionAnswer
    technology: TechnologyAnswer
    transaction_cost: TransactionCostAnswer
    hold_up_risk: HoldUpRiskAnswer
    bargaining: BargainingAnswer
    additional: AdditionalAnswer

    def answer_for(self, framework: FrameworkId) -> CamelModel:
        return getattr(self, framework.field_name)


# ── Analysis results ──────────────────────────────────────────────────────────

class FrameworkRecommendation(FrozenCamelModel):
    framework: str
    recommendation: Verdict
    confidence: int = Field(..., ge=0, le=100)
    reasoning: str


class WeightedResult(FrozenCamelModel):
    """Percentage split; sums to 99-101 because buckets round independently."""
    make: int = Field(..., ge=0)
    buy: int = Field(..., ge=0)
    partner: int = Field(..., ge=0)

    def share(self, decision: Decision) -> int:
        return getattr(self, decision.value)


class FeedbackItem(FrozenCamelModel):
    type: FeedbackKind
    title: str
    description: str


class FinalAnalysis(FrozenCamelModel):
    framework_results: list[FrameworkRecommendation]
    weighted_result: WeightedResult
    primary_recommendation: Decision
    conflicting_frameworks: bool
    feedback: list[FeedbackItem] = Field(default_factory=list)


# ── Scenario & stance ─────────────────────────────────────────────────────────

class ParsedScenario(CamelModel):
    """Scenario fields produced by the scenario-parsing collaborator."""
    title: str
    summary: str
    context: str = ""
    key_factors: list[str] = Field(default_factory=list)
    stakeholders: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)


def _scenario_id() -> str:
    return f"scenario-{int(datetime.now(timezone.utc).timestamp() * 1000)}"


class Scenario(ParsedScenario):
    id: str = Field(default_factory=_scenario_id)
    raw_input: Optional[str] = None
    source_type: SourceType = "text"


class InitialStance(CamelModel):
    """The student's gut call, locked before any framework is answered."""
    decision: Decision
    reasoning: str
    confidence: int = Field(..., ge=1, le=5)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ── Request bodies ────────────────────────────────────────────────────────────

class ParseScenarioRequest(CamelModel):
    input: str
    source_type: Literal["text", "pdf", "url"] = "text"


class HintRequest(CamelModel):
    framework: FrameworkId
    scenario: Scenario
    inputs: dict = Field(default_factory=dict)


class HintResponse(CamelModel):
    hint: str


class InputHintsRequest(CamelModel):
    framework: FrameworkId
    scenario: Scenario


class InputHintsResponse(CamelModel):
    framework: FrameworkId
    hints: dict[str, str]


class AnalyzeRequest(CamelModel):
    scenario: Scenario
    stance: InitialStance
    frameworks: FrameworkAnswers


class FeedbackRequest(CamelModel):
    scenario: Scenario
    stance: InitialStance
    analysis: FinalAnalysis


class ExtractedContent(CamelModel):
    text: str
