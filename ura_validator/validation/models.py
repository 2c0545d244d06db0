"""Value types shared by the registry, validators, engine, and proof hasher."""

from __future__ import annotations

import copy
import math
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ura_validator.validation.domains import ValidationDomain

ThresholdValue = float | int | bool | str


def utc_now() -> str:
    return datetime.now(tz=UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def clamp_confidence(value: object) -> float:
    """Clamp to [0, 1]; non-numeric and non-finite inputs collapse to 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    if math.isnan(number):
        return 0.0
    return max(0.0, min(1.0, number))


@dataclass(frozen=True)
class ValidationRequest:
    payload: Any
    rule_set_id: str | None
    domain: ValidationDomain | str | None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Verdict:
    is_valid: bool
    confidence: float
    timestamp: int | None = None
    details: Mapping[str, Any] = field(default_factory=dict)
    errors: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", dict(self.details))
        if self.errors is not None:
            object.__setattr__(self, "errors", tuple(self.errors))

    @classmethod
    def failed(cls, reason: str, *, details: Mapping[str, Any] | None = None) -> Verdict:
        merged: dict[str, Any] = {"error": reason}
        merged.update(details or {})
        return cls(
            is_valid=False,
            confidence=0.0,
            timestamp=epoch_millis(),
            details=merged,
            errors=(reason,),
        )

    def to_contract_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "isValid": self.is_valid,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
            "details": copy.deepcopy(dict(self.details)),
        }
        if self.errors:
            payload["errors"] = list(self.errors)
        return payload


@dataclass(frozen=True)
class RuleSetParameters:
    id: str
    display_name: str
    description: str
    domain: ValidationDomain
    thresholds: Mapping[str, ThresholdValue] = field(default_factory=dict)
    active: bool = True
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "thresholds", dict(self.thresholds))

    def number(self, key: str, default: float) -> float:
        value = self.thresholds.get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return float(value)

    def flag(self, key: str, default: bool) -> bool:
        value = self.thresholds.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return default

    def to_contract_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.display_name,
            "description": self.description,
            "validationType": self.domain.value,
            "parameters": dict(self.thresholds),
            "isActive": self.active,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class ProofRecord:
    data_hash: str
    proof_hash: str
    rule_set_id: str
    timestamp: int

    def to_contract_payload(self) -> dict[str, Any]:
        return {
            "dataHash": self.data_hash,
            "proofHash": self.proof_hash,
            "ruleSetId": self.rule_set_id,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ValidationOutcome:
    verdict: Verdict
    proof: ProofRecord | None


__all__ = [
    "ProofRecord",
    "RuleSetParameters",
    "ThresholdValue",
    "ValidationOutcome",
    "ValidationRequest",
    "Verdict",
    "clamp_confidence",
    "epoch_millis",
    "utc_now",
]
