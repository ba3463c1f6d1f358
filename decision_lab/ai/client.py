# decision_lab/ai/client.py
"""AI collaborator: provider clients and the typed service built on them.

Provider selection is explicit: callers build an ``AIConfig`` once and hand
it to ``AIService``. Model output is decoded strictly into pydantic models;
anything that does not validate raises ``ParseError`` so the request
boundary can fall back to the deterministic core.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

import anthropic
import openai
from pydantic import TypeAdapter, ValidationError

from decision_lab.ai.prompts import (
    ANALYSIS_PROMPT,
    FEEDBACK_PROMPT,
    HINT_GENERATION_PROMPT,
    INPUT_HINTS_PROMPT,
    SCENARIO_PARSING_PROMPT,
    render,
)
from decision_lab.config import AIConfig
from decision_lab.inputs import describe_inputs
from decision_lab.models import (
    FeedbackItem,
    FinalAnalysis,
    FrameworkAnswers,
    FrameworkId,
    InitialStance,
    ParsedScenario,
    Scenario,
)

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AIServiceError(Exception):
    """The AI collaborator is disabled, unreachable, or returned an error."""


class ParseError(AIServiceError):
    """The AI collaborator answered, but not with the structure we asked for."""


# ── Providers ─────────────────────────────────────────────────────────────────

class AIProvider(ABC):
    """Minimal text-completion interface shared by all backends."""

    name: str = ""

    @abstractmethod
    def complete(self, prompt: str, system: Optional[str] = None) -> str:
        ...


class AnthropicProvider(AIProvider):
    name = "anthropic"

    def __init__(self, config: AIConfig):
        self.config = config
        self.client = anthropic.Anthropic(api_key=config.api_key, timeout=config.timeout)

    def complete(self, prompt: str, system: Optional[str] = None) -> str:
        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise AIServiceError(f"Anthropic API error: {e}") from e

        return "".join(block.text for block in response.content if block.type == "text")


class OpenAIProvider(AIProvider):
    name = "openai"

    def __init__(self, config: AIConfig):
        self.config = config
        self.client = openai.OpenAI(api_key=config.api_key, timeout=config.timeout)

    def complete(self, prompt: str, system: Optional[str] = None) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                max_tokens=self.config.max_tokens,
            )
        except openai.OpenAIError as e:
            raise AIServiceError(f"OpenAI API error: {e}") from e

        if not response.choices or response.choices[0].message is None:
            return ""
        return response.choices[0].message.content or ""


PROVIDERS: dict[str, type[AIProvider]] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def build_provider(config: AIConfig) -> AIProvider:
    if not config.enabled:
        raise AIServiceError(f"AI provider '{config.provider}' is not configured")
    return PROVIDERS[config.provider](config)


# ── Strict decoding ───────────────────────────────────────────────────────────

def decode(text: str, target: Any) -> Any:
    """Validate model output against ``target`` (a type understood by pydantic)."""
    body = text.strip()
    fenced = _FENCE.match(body)
    if fenced:
        body = fenced.group(1)
    try:
        return TypeAdapter(target).validate_json(body)
    except ValidationError as e:
        logger.debug("Rejected AI response: %s", text[:500])
        raise ParseError(f"AI response did not match {getattr(target, '__name__', target)}") from e


# ── Service ───────────────────────────────────────────────────────────────────

class AIService:
    """Scenario parsing, hints, analysis and feedback backed by an AI provider."""

    def __init__(self, config: AIConfig, provider: Optional[AIProvider] = None):
        self.config = config
        self._provider = provider

    @property
    def enabled(self) -> bool:
        return self._provider is not None or self.config.enabled

    @property
    def provider(self) -> AIProvider:
        if self._provider is None:
            self._provider = build_provider(self.config)
            logger.info("AI provider initialized: %s (%s)", self.config.provider, self.config.model)
        return self._provider

    def parse_scenario(self, text: str, source_type: str = "text") -> Scenario:
        response = self.provider.complete(
            f"Source type: {source_type}\n\nContent:\n{text}",
            system=SCENARIO_PARSING_PROMPT,
        )
        parsed = decode(response, ParsedScenario)
        return Scenario(**parsed.model_dump(), raw_input=text, source_type=source_type)

    def generate_hint(self, framework: FrameworkId, scenario: Scenario, inputs: dict) -> str:
        prompt = render(
            HINT_GENERATION_PROMPT,
            framework=framework.value,
            scenario=_scenario_json(scenario, detailed=True),
            inputs=json.dumps(inputs, indent=2),
            inputsMetadata=describe_inputs(framework),
        )
        hint = self.provider.complete(prompt).strip()
        if not hint:
            raise ParseError("AI returned an empty hint")
        return hint

    def generate_input_hints(self, framework: FrameworkId, scenario: Scenario) -> dict[str, str]:
        prompt = render(
            INPUT_HINTS_PROMPT,
            framework=framework.value,
            scenario=_scenario_json(scenario, detailed=True),
            inputsMetadata=describe_inputs(framework),
        )
        return decode(self.provider.complete(prompt), dict[str, str])

    def analyze_results(
        self, scenario: Scenario, stance: InitialStance, frameworks: FrameworkAnswers
    ) -> FinalAnalysis:
        prompt = render(
            ANALYSIS_PROMPT,
            scenario=_scenario_json(scenario),
            stance=stance.decision.value,
            frameworks=frameworks.model_dump_json(by_alias=True),
        )
        analysis = decode(self.provider.complete(prompt), FinalAnalysis)
        return analysis.model_copy(update={"feedback": []})

    def provide_feedback(
        self, scenario: Scenario, stance: InitialStance, analysis: FinalAnalysis
    ) -> list[FeedbackItem]:
        summary = analysis.model_dump(
            mode="json", by_alias=True, include={"primary_recommendation", "weighted_result"}
        )
        prompt = render(
            FEEDBACK_PROMPT,
            scenario=scenario.model_dump_json(by_alias=True, include={"title", "summary"}),
            stance=stance.decision.value,
            reasoning=stance.reasoning,
            analysis=json.dumps(summary),
        )
        return decode(self.provider.complete(prompt), list[FeedbackItem])


def _scenario_json(scenario: Scenario, detailed: bool = False) -> str:
    fields = {"title", "summary", "context"}
    if detailed:
        fields |= {"key_factors", "stakeholders", "constraints"}
    return scenario.model_dump_json(by_alias=True, include=fields, indent=2)
