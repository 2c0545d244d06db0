"""Contract tests for the AI capability adapter and reply parsing."""

from __future__ import annotations

import asyncio

import pytest

from ura_validator.agents.capability_adapter import AICapabilityAdapter, parse_structured
from ura_validator.agents.prompts import KYC_SYSTEM_PROMPT, SOCIAL_SYSTEM_PROMPT
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import CapabilityError


class _RecordingCapability:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[dict[str, object]] = []

    async def complete(self, prompt: str, *, system: str, temperature: float, max_tokens: int) -> str:
        self.calls.append({"prompt": prompt, "system": system, "temperature": temperature, "max_tokens": max_tokens})
        return self.reply


class _SlowCapability:
    async def complete(self, prompt: str, *, system: str, temperature: float, max_tokens: int) -> str:
        await asyncio.sleep(1)
        return "{}"


class _BrokenCapability:
    async def complete(self, prompt: str, *, system: str, temperature: float, max_tokens: int) -> str:
        raise ValueError("bad gateway")


def test_parse_structured_reads_json_reply() -> None:
    review = parse_structured(
        '{"isValid": true, "confidence": 0.72, "reasoning": "Looks fine.", '
        '"details": {"riskScore": 0.1}, "flags": ["NEW_WALLET"]}'
    )

    assert review.structured is True
    assert review.is_valid is True
    assert review.confidence == 0.72
    assert review.reasoning == "Looks fine."
    assert review.details == {"riskScore": 0.1}
    assert review.flags == ("NEW_WALLET",)


def test_parse_structured_unwraps_fenced_json() -> None:
    review = parse_structured('Here you go:\n```json\n{"isValid": false, "confidence": 3}\n```')

    assert review.structured is True
    assert review.is_valid is False
    assert review.confidence == 1.0


def test_parse_structured_falls_back_to_line_heuristics() -> None:
    review = parse_structured("Decision: rejected\nConfidence: 90\nFlag: mixer exposure")

    assert review.structured is False
    assert review.is_valid is False
    assert review.confidence == 0.9
    assert review.flags == ("Flag: mixer exposure",)
    assert review.details == {}


@pytest.mark.parametrize("reply", ["", "???", "[1, 2, 3]", '"just a string"'])
def test_parse_structured_never_raises(reply: str) -> None:
    review = parse_structured(reply)

    assert review.structured is False
    assert review.is_valid is False
    assert review.confidence == 0.5


def test_review_uses_domain_prompt_and_context() -> None:
    capability = _RecordingCapability('{"isValid": true, "confidence": 0.8}')
    adapter = AICapabilityAdapter(capability=capability, max_tokens=500)

    review = asyncio.run(
        adapter.review(ValidationDomain.WEB3_SOCIAL, {"content": "gm"}, {"platform": "lens"})
    )

    assert review.is_valid is True
    call = capability.calls[0]
    assert call["system"] == SOCIAL_SYSTEM_PROMPT
    assert call["max_tokens"] == 500
    assert str(call["prompt"]).startswith('Context:\nplatform: "lens"')
    assert 'Content: "gm"' in str(call["prompt"])


def test_supports_only_ai_assisted_domains() -> None:
    adapter = AICapabilityAdapter(capability=_RecordingCapability("{}"))

    assert adapter.supports(ValidationDomain.DEFI_KYC)
    assert adapter.supports(ValidationDomain.WEB3_SOCIAL)
    assert not adapter.supports(ValidationDomain.DEPIN_SENSOR)
    with pytest.raises(CapabilityError):
        asyncio.run(adapter.review(ValidationDomain.DEPIN_SENSOR, {"sensorId": "s"}))


def test_kyc_review_sends_compliance_prompt() -> None:
    capability = _RecordingCapability('{"isValid": true, "confidence": 0.8}')
    adapter = AICapabilityAdapter(capability=capability)

    asyncio.run(adapter.review(ValidationDomain.DEFI_KYC, {"walletAddress": "0xabc"}))

    assert capability.calls[0]["system"] == KYC_SYSTEM_PROMPT
    assert "Wallet Address: 0xabc" in str(capability.calls[0]["prompt"])


def test_timeout_becomes_capability_error() -> None:
    adapter = AICapabilityAdapter(capability=_SlowCapability(), timeout_seconds=0.01)

    with pytest.raises(CapabilityError) as exc_info:
        asyncio.run(adapter.complete("prompt", system="system"))

    assert exc_info.value.code == "AI_CAPABILITY_ERROR"
    assert exc_info.value.details == {"timeoutSeconds": 0.01}


def test_provider_failure_becomes_capability_error() -> None:
    adapter = AICapabilityAdapter(capability=_BrokenCapability())

    with pytest.raises(CapabilityError, match="bad gateway"):
        asyncio.run(adapter.complete("prompt", system="system"))


def test_parse_structured_survives_deeply_nested_json() -> None:
    nested = "[" * 100_000 + "]" * 100_000

    review = parse_structured(nested)

    assert review.structured is False
    assert review.is_valid is False
    assert review.confidence == 0.5
    assert review.reasoning == nested
