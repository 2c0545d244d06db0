"""Validator contract shared by every domain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.models import RuleSetParameters, Verdict, clamp_confidence, epoch_millis


@dataclass(frozen=True)
class ValidationContext:
    request_id: str
    domain: ValidationDomain
    rule_set_id: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


class DomainValidator(ABC):
    """Scores one domain's payloads against a rule-set snapshot.

    Implementations report domain input defects as an invalid,
    zero-confidence verdict carrying an ``error`` detail rather than raising.
    """

    domain: ClassVar[ValidationDomain]

    @abstractmethod
    async def validate(
        self,
        payload: Any,
        parameters: RuleSetParameters,
        context: ValidationContext,
    ) -> Verdict:
        ...

    @staticmethod
    def create_result(is_valid: bool, confidence: float, details: Mapping[str, Any]) -> Verdict:
        return Verdict(
            is_valid=is_valid,
            confidence=clamp_confidence(confidence),
            timestamp=epoch_millis(),
            details=details,
        )

    @staticmethod
    def reject(reason: str, **details: Any) -> Verdict:
        return Verdict.failed(reason, details=details)

    @staticmethod
    def as_mapping(payload: Any) -> Mapping[str, Any] | None:
        return payload if isinstance(payload, Mapping) else None


def check_status(passed: bool) -> str:
    return "passed" if passed else "failed"


__all__ = ["DomainValidator", "ValidationContext", "check_status"]
