"""Validation dispatcher: input invariants, routing, normalization, batching."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from ura_validator.validation.domains import DOMAIN_PROFILES, DomainProfile, ValidationDomain, parse_domain
from ura_validator.validation.errors import (
    ConfigError,
    EmptyPayloadError,
    InactiveRuleSetError,
    InputError,
    MalformedPayloadError,
    MissingFieldError,
    RuleSetDomainMismatchError,
    UnknownRuleSetError,
    ValidationServiceError,
)
from ura_validator.validation.models import (
    RuleSetParameters,
    ValidationOutcome,
    ValidationRequest,
    Verdict,
    clamp_confidence,
    epoch_millis,
)
from ura_validator.validation.proof import build_proof, canonical_json
from ura_validator.validation.request_state_machine import RequestLifecycle
from ura_validator.validation.ruleset_registry import RuleSetRegistry
from ura_validator.validation.validators.base import ValidationContext
from ura_validator.validation.validators.registry import ValidatorRegistry

logger = logging.getLogger(__name__)


def _is_empty(payload: Any) -> bool:
    if isinstance(payload, str):
        return payload.strip() == ""
    if isinstance(payload, (dict, list, tuple, set)):
        return len(payload) == 0
    return False


def _domain_or_none(value: Any) -> ValidationDomain | None:
    if value is None:
        return None
    try:
        return parse_domain(value)
    except ConfigError:
        return None


class ValidationEngine:
    """Routes validation requests to domain validators.

    ``InputError`` and unexpected validator crashes end a request with an
    invalid, zero-confidence verdict. ``ConfigError`` propagates to the
    caller so the transport can answer with a client error.
    """

    def __init__(self, *, validators: ValidatorRegistry, rule_sets: RuleSetRegistry) -> None:
        self._validators = validators
        self._rule_sets = rule_sets

    @property
    def rule_sets(self) -> RuleSetRegistry:
        return self._rule_sets

    def available_domains(self) -> list[DomainProfile]:
        return [DOMAIN_PROFILES[domain] for domain in self._validators.domains()]

    def pre_validate(self, request: ValidationRequest) -> tuple[ValidationDomain, RuleSetParameters]:
        """Check request invariants and resolve the rule-set snapshot."""
        if request.payload is None:
            raise MissingFieldError("payload")
        if request.rule_set_id is None or str(request.rule_set_id).strip() == "":
            raise MissingFieldError("ruleSetId")
        if request.domain is None or str(request.domain).strip() == "":
            raise MissingFieldError("domain")
        domain = parse_domain(request.domain)
        if _is_empty(request.payload):
            raise EmptyPayloadError("Payload must not be empty")
        canonical_json(request.payload)

        rule_set = self._rule_sets.snapshot(request.rule_set_id)
        if rule_set is None:
            raise UnknownRuleSetError(request.rule_set_id)
        if rule_set.domain != domain:
            raise RuleSetDomainMismatchError(
                rule_set_id=rule_set.id,
                expected=domain.value,
                actual=rule_set.domain.value,
            )
        if not rule_set.active:
            raise InactiveRuleSetError(rule_set.id)
        return domain, rule_set

    def post_validate(
        self,
        verdict: Verdict,
        *,
        rule_set_id: str | None,
        domain: ValidationDomain | None,
        started_at: float,
    ) -> Verdict:
        """Clamp confidence, backfill the timestamp, and widen details without overwriting."""
        details = dict(verdict.details)
        details.setdefault("ruleSetId", rule_set_id)
        details.setdefault("domain", domain.value if domain is not None else None)
        details.setdefault("processingTimeMs", int((time.perf_counter() - started_at) * 1000))
        return Verdict(
            is_valid=verdict.is_valid,
            confidence=clamp_confidence(verdict.confidence),
            timestamp=verdict.timestamp if verdict.timestamp is not None else epoch_millis(),
            details=details,
            errors=verdict.errors,
        )

    async def validate(self, request: ValidationRequest) -> ValidationOutcome:
        request_id = str(request.metadata.get("requestId") or f"val-{uuid4()}")
        lifecycle = RequestLifecycle(request_id)
        started_at = time.perf_counter()
        domain: ValidationDomain | None = None

        try:
            domain, rule_set = self.pre_validate(request)
        except InputError as exc:
            self._log_failure(lifecycle, exc, operation="pre_validate")
            domain = _domain_or_none(request.domain)
            verdict = self.post_validate(
                Verdict.failed(exc.message, details={"errorCode": exc.code, **exc.details}),
                rule_set_id=request.rule_set_id,
                domain=domain,
                started_at=started_at,
            )
            return ValidationOutcome(verdict=verdict, proof=self._proof_or_none(request, verdict))
        except ConfigError as exc:
            self._log_failure(lifecycle, exc, operation="pre_validate")
            raise
        self._advance(lifecycle, "pre_validated")

        try:
            validator = self._validators.get(domain)
        except ValidationServiceError as exc:
            self._log_failure(lifecycle, exc, operation="dispatch")
            raise
        self._advance(lifecycle, "dispatched")

        context = ValidationContext(
            request_id=request_id,
            domain=domain,
            rule_set_id=rule_set.id,
            metadata=dict(request.metadata),
        )
        try:
            raw_verdict = await validator.validate(request.payload, rule_set, context)
        except InputError as exc:
            self._log_failure(lifecycle, exc, operation="validate")
            raw_verdict = Verdict.failed(exc.message, details={"errorCode": exc.code, **exc.details})
        except Exception as exc:
            lifecycle.advance("failed")
            logger.exception(
                "Validator crashed.",
                extra={
                    "requestId": request_id,
                    "component": "validation_engine",
                    "operation": "validate",
                    "domain": domain.value,
                    "ruleSetId": rule_set.id,
                },
            )
            raw_verdict = Verdict.failed(f"Validator error: {exc}", details={"errorCode": "VALIDATOR_ERROR"})

        verdict = self.post_validate(raw_verdict, rule_set_id=rule_set.id, domain=domain, started_at=started_at)
        if not lifecycle.is_terminal:
            self._advance(lifecycle, "post_processed")
            self._advance(lifecycle, "completed")
        logger.info(
            "Validation completed.",
            extra={
                "requestId": request_id,
                "component": "validation_engine",
                "operation": "validate",
                "domain": domain.value,
                "ruleSetId": rule_set.id,
                "isValid": verdict.is_valid,
                "confidence": verdict.confidence,
                "state": lifecycle.state,
            },
        )
        return ValidationOutcome(verdict=verdict, proof=build_proof(request.payload, verdict, rule_set.id))

    async def batch_validate(self, requests: Sequence[ValidationRequest]) -> list[Verdict]:
        """Validate concurrently, isolating failures per item and preserving order."""
        results = await asyncio.gather(
            *(self.validate(request) for request in requests),
            return_exceptions=True,
        )
        verdicts: list[Verdict] = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                code = result.code if isinstance(result, ValidationServiceError) else "INTERNAL_ERROR"
                logger.warning(
                    "Batch item failed.",
                    extra={
                        "component": "validation_engine",
                        "operation": "batch_validate",
                        "requestIndex": index,
                        "errorCode": code,
                    },
                )
                verdicts.append(
                    Verdict.failed(
                        str(result) or type(result).__name__,
                        details={"requestIndex": index, "errorCode": code},
                    )
                )
                continue
            details = dict(result.verdict.details)
            details["requestIndex"] = index
            verdicts.append(
                Verdict(
                    is_valid=result.verdict.is_valid,
                    confidence=result.verdict.confidence,
                    timestamp=result.verdict.timestamp,
                    details=details,
                    errors=result.verdict.errors,
                )
            )
        return verdicts

    def _advance(self, lifecycle: RequestLifecycle, target: str) -> None:
        previous = lifecycle.state
        lifecycle.advance(target)
        logger.debug(
            "Validation request transitioned.",
            extra={
                "requestId": lifecycle.request_id,
                "component": "validation_engine",
                "operation": "transition",
                "fromState": previous,
                "toState": target,
            },
        )

    def _log_failure(self, lifecycle: RequestLifecycle, exc: ValidationServiceError, *, operation: str) -> None:
        lifecycle.advance("failed")
        logger.warning(
            "Validation request failed.",
            extra={
                "requestId": lifecycle.request_id,
                "component": "validation_engine",
                "operation": operation,
                "errorCode": exc.code,
                "state": lifecycle.state,
            },
        )

    @staticmethod
    def _proof_or_none(request: ValidationRequest, verdict: Verdict):
        try:
            return build_proof(request.payload, verdict, request.rule_set_id or "")
        except MalformedPayloadError:
            return None


__all__ = ["ValidationEngine"]
