"""AI collaborator for scenario parsing, hints, analysis and feedback."""
from decision_lab.ai.client import (
    AIProvider,
    AIService,
    AIServiceError,
    AnthropicProvider,
    OpenAIProvider,
    ParseError,
)

__all__ = [
    "AIProvider",
    "AIService",
    "AIServiceError",
    "AnthropicProvider",
    "OpenAIProvider",
    "ParseError",
]
