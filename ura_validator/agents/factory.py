"""Construct the AI adapter from settings."""

from __future__ import annotations

import logging

from ura_validator.agents.capability import XAICompletionCapability
from ura_validator.agents.capability_adapter import AICapabilityAdapter
from ura_validator.config import Settings

logger = logging.getLogger(__name__)


def build_ai_adapter(settings: Settings) -> AICapabilityAdapter | None:
    """Return an adapter over xAI, or None when AI is disabled or unkeyed."""
    if not settings.ai_configured:
        logger.info(
            "AI capability disabled; validators use heuristic scoring only.",
            extra={"component": "ai_capability", "operation": "build", "aiEnabled": settings.ai_enabled},
        )
        return None
    capability = XAICompletionCapability(api_key=settings.xai_api_key, model=settings.xai_model)
    return AICapabilityAdapter(
        capability=capability,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        timeout_seconds=settings.ai_timeout_seconds,
    )


__all__ = ["build_ai_adapter"]
