"""Validation, batch validation, catalog, and attestation flows for the v1 API."""

from __future__ import annotations

import logging
from typing import Any

from ura_validator.platform_api.adapters.attestation_adapter import AttestationAdapter, AttestationError
from ura_validator.platform_api.errors import PlatformAPIError, from_service_error
from ura_validator.platform_api.observability import log_context_event
from ura_validator.platform_api.schemas_v1 import (
    AttestationRequest,
    AttestationResponse,
    BatchValidateRequest,
    BatchValidateResponse,
    ProofRecordModel,
    RequestContext,
    ValidateRequest,
    ValidateResponse,
    ValidationTypeInfo,
    ValidationTypeListResponse,
    VerdictModel,
)
from ura_validator.validation.engine import ValidationEngine
from ura_validator.validation.errors import ValidationServiceError
from ura_validator.validation.models import ValidationRequest, Verdict

logger = logging.getLogger(__name__)

PASSTHROUGH_ATTESTATION_STATUSES = frozenset({400, 409, 422})


def _to_core_request(request: ValidateRequest, *, request_id: str) -> ValidationRequest:
    return ValidationRequest(
        payload=request.data,
        rule_set_id=request.ruleSetId,
        domain=request.validationType,
        metadata={**request.metadata, "requestId": request_id},
    )


def _verdict_model(verdict: Verdict) -> VerdictModel:
    return VerdictModel(**verdict.to_contract_payload())


class ValidationService:
    """Platform-facing facade over the validation engine."""

    def __init__(
        self,
        *,
        engine: ValidationEngine,
        attestation_adapter: AttestationAdapter,
        validator_name: str,
    ) -> None:
        self._engine = engine
        self._attestation_adapter = attestation_adapter
        self._validator_name = validator_name

    async def validate(self, *, request: ValidateRequest, context: RequestContext) -> ValidateResponse:
        try:
            outcome = await self._engine.validate(_to_core_request(request, request_id=context.request_id))
        except ValidationServiceError as exc:
            log_context_event(
                logger,
                level=logging.WARNING,
                message="Validation request rejected.",
                context=context,
                component="validation_service",
                operation="validate",
                errorCode=exc.code,
            )
            raise from_service_error(exc, request_id=context.request_id) from exc

        verdict = outcome.verdict
        proof = outcome.proof
        if request.dataHash is not None and proof is not None and request.dataHash != proof.data_hash:
            raise PlatformAPIError(
                status_code=400,
                code="DATA_HASH_MISMATCH",
                message="Supplied dataHash does not match the canonical payload hash.",
                details={"supplied": request.dataHash, "computed": proof.data_hash},
                request_id=context.request_id,
            )

        details: dict[str, Any] = dict(verdict.details)
        raw_flags = details.get("flags")
        flags = [str(flag) for flag in raw_flags] if isinstance(raw_flags, list) else []
        log_context_event(
            logger,
            level=logging.INFO,
            message="Validation verdict issued.",
            context=context,
            component="validation_service",
            operation="validate",
            ruleSetId=request.ruleSetId,
            domain=verdict.details.get("domain"),
            isValid=verdict.is_valid,
        )
        return ValidateResponse(
            requestId=context.request_id,
            validator=self._validator_name,
            isValid=verdict.is_valid,
            confidence=verdict.confidence,
            timestamp=verdict.timestamp,
            ruleSetId=request.ruleSetId,
            dataHash=proof.data_hash if proof is not None else None,
            proofHash=proof.proof_hash if proof is not None else None,
            proof=ProofRecordModel(**proof.to_contract_payload()) if proof is not None else None,
            details=details,
            flags=flags,
            errors=list(verdict.errors) if verdict.errors else None,
            metadata=dict(request.metadata),
        )

    async def batch_validate(
        self,
        *,
        request: BatchValidateRequest,
        context: RequestContext,
    ) -> BatchValidateResponse:
        core_requests = [
            _to_core_request(item, request_id=f"{context.request_id}-{index}")
            for index, item in enumerate(request.requests)
        ]
        verdicts = await self._engine.batch_validate(core_requests)
        log_context_event(
            logger,
            level=logging.INFO,
            message="Batch validation completed.",
            context=context,
            component="validation_service",
            operation="batch_validate",
            itemCount=len(verdicts),
            validCount=sum(1 for verdict in verdicts if verdict.is_valid),
        )
        return BatchValidateResponse(
            requestId=context.request_id,
            results=[_verdict_model(verdict) for verdict in verdicts],
        )

    async def list_validation_types(self, *, context: RequestContext) -> ValidationTypeListResponse:
        return ValidationTypeListResponse(
            requestId=context.request_id,
            items=[
                ValidationTypeInfo(**profile.to_contract_payload())
                for profile in self._engine.available_domains()
            ],
        )

    async def attest(self, *, request: AttestationRequest, context: RequestContext) -> AttestationResponse:
        try:
            transaction_id = await self._attestation_adapter.submit(
                data_hash=request.dataHash,
                proof_hash=request.proofHash,
                rule_set_id=request.ruleSetId,
                is_valid=request.isValid,
                metadata=request.metadata,
            )
        except AttestationError as exc:
            log_context_event(
                logger,
                level=logging.WARNING,
                message="Attestation submission failed.",
                context=context,
                component="validation_service",
                operation="attest",
                errorCode=exc.code,
                upstreamStatus=exc.status_code,
            )
            status_code = exc.status_code if exc.status_code in PASSTHROUGH_ATTESTATION_STATUSES else 502
            raise PlatformAPIError(
                status_code=status_code,
                code=exc.code,
                message=exc.message,
                request_id=context.request_id,
            ) from exc
        return AttestationResponse(requestId=context.request_id, transactionId=transaction_id)


__all__ = ["ValidationService"]
