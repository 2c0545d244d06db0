"""Total adapter over a fallible completion capability."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ura_validator.agents.capability import CompletionCapability
from ura_validator.agents.prompts import DOMAIN_PROMPTS, with_context
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import CapabilityError
from ura_validator.validation.models import clamp_confidence

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_CONFIDENCE_PATTERN = re.compile(r"confidence[:\s]+(\d+\.?\d*)", re.IGNORECASE)


@dataclass(frozen=True)
class AIReview:
    is_valid: bool
    confidence: float
    reasoning: str
    details: Mapping[str, Any] = field(default_factory=dict)
    flags: tuple[str, ...] = ()
    structured: bool = True


def _json_candidate(text: str) -> str:
    fenced = _FENCED_JSON.search(text)
    if fenced is not None:
        return fenced.group(1).strip()
    return text.strip()


def _parse_json_reply(text: str) -> AIReview | None:
    try:
        parsed = json.loads(_json_candidate(text))
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    details = parsed.get("details")
    flags = parsed.get("flags")
    reasoning = parsed.get("reasoning")
    return AIReview(
        is_valid=parsed.get("isValid") is True,
        confidence=clamp_confidence(parsed.get("confidence", 0)),
        reasoning=reasoning if isinstance(reasoning, str) and reasoning else text,
        details=details if isinstance(details, dict) else {},
        flags=tuple(str(flag) for flag in flags) if isinstance(flags, list) else (),
    )


def _parse_text_reply(text: str) -> AIReview:
    is_valid = False
    confidence = 0.5
    flags: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        lowered = line.lower()
        if "valid: true" in lowered or "approved" in lowered:
            is_valid = True
        if "valid: false" in lowered or "rejected" in lowered:
            is_valid = False
        match = _CONFIDENCE_PATTERN.search(line)
        if match is not None:
            value = float(match.group(1))
            confidence = value / 100 if value > 1 else value
        if "flag" in lowered or "warning" in lowered:
            flags.append(line)
    return AIReview(
        is_valid=is_valid,
        confidence=clamp_confidence(confidence),
        reasoning=text,
        details={},
        flags=tuple(flags),
        structured=False,
    )


def parse_structured(text: str) -> AIReview:
    """Parse a model reply: strict JSON first, then line heuristics. Never raises."""
    review = _parse_json_reply(text)
    if review is not None:
        return review
    return _parse_text_reply(text)


class AICapabilityAdapter:
    """Bounds a completion capability with a timeout and a stable error type."""

    def __init__(
        self,
        *,
        capability: CompletionCapability,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._capability = capability
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds

    def supports(self, domain: ValidationDomain) -> bool:
        return domain in DOMAIN_PROMPTS

    async def complete(self, prompt: str, *, system: str) -> str:
        try:
            return await asyncio.wait_for(
                self._capability.complete(
                    prompt,
                    system=system,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                ),
                timeout=self._timeout_seconds,
            )
        except TimeoutError as exc:
            raise CapabilityError(
                f"AI capability timed out after {self._timeout_seconds}s",
                details={"timeoutSeconds": self._timeout_seconds},
            ) from exc
        except CapabilityError:
            raise
        except Exception as exc:
            raise CapabilityError(f"AI capability failed: {exc}") from exc

    async def review(
        self,
        domain: ValidationDomain,
        payload: Mapping[str, Any],
        context: Mapping[str, Any] | None = None,
    ) -> AIReview:
        prompts = DOMAIN_PROMPTS.get(domain)
        if prompts is None:
            raise CapabilityError(f"No AI review available for domain {domain.value}", details={"domain": domain.value})
        system, build_task = prompts
        text = await self.complete(with_context(build_task(payload), context), system=system)
        review = parse_structured(text)
        logger.debug(
            "AI review parsed.",
            extra={
                "component": "ai_capability",
                "operation": "review",
                "domain": domain.value,
                "structured": review.structured,
            },
        )
        return review


__all__ = ["AICapabilityAdapter", "AIReview", "parse_structured"]
