"""AI capability adapters used by validators."""

from ura_validator.agents.capability import CompletionCapability, XAICompletionCapability
from ura_validator.agents.capability_adapter import AICapabilityAdapter, AIReview, parse_structured
from ura_validator.agents.factory import build_ai_adapter

__all__ = [
    "AICapabilityAdapter",
    "AIReview",
    "CompletionCapability",
    "XAICompletionCapability",
    "build_ai_adapter",
    "parse_structured",
]
