"""FastAPI router implementing the v1 validator surface."""

from __future__ import annotations

from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, Header, Query, Request, status

from ura_validator.config import get_settings
from ura_validator.platform_api.runtime import build_runtime
from ura_validator.platform_api.schemas_v1 import (
    AttestationRequest,
    AttestationResponse,
    BatchValidateRequest,
    BatchValidateResponse,
    CreateRuleSetRequest,
    DeleteRuleSetResponse,
    HealthResponse,
    RequestContext,
    RuleSetListResponse,
    RuleSetResponse,
    UpdateRuleSetRequest,
    ValidateRequest,
    ValidateResponse,
    ValidationTypeListResponse,
)
from ura_validator.validation.models import utc_now

router = APIRouter(prefix="/v1")

_runtime = build_runtime(get_settings())
_validation_service = _runtime.validation_service
_ruleset_service = _runtime.ruleset_service


async def _request_context(
    request: Request,
    x_request_id: str | None = Header(default=None, alias="X-Request-Id"),
) -> RequestContext:
    request_id = getattr(request.state, "request_id", None) or x_request_id or f"req-{uuid4()}"
    request.state.request_id = request_id
    return RequestContext(request_id=request_id)


ContextDep = Annotated[RequestContext, Depends(_request_context)]


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def get_health_v1(
    context: ContextDep,
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=_runtime.settings.validator_name,
        timestamp=utc_now(),
        aiEnabled=_runtime.settings.ai_configured,
    )


@router.post("/validate", response_model=ValidateResponse, tags=["Validation"])
async def post_validate_v1(
    request: ValidateRequest,
    context: ContextDep,
) -> ValidateResponse:
    return await _validation_service.validate(request=request, context=context)


@router.post("/validate/batch", response_model=BatchValidateResponse, tags=["Validation"])
async def post_validate_batch_v1(
    request: BatchValidateRequest,
    context: ContextDep,
) -> BatchValidateResponse:
    return await _validation_service.batch_validate(request=request, context=context)


@router.get("/validation-types", response_model=ValidationTypeListResponse, tags=["Validation"])
async def list_validation_types_v1(
    context: ContextDep,
) -> ValidationTypeListResponse:
    return await _validation_service.list_validation_types(context=context)


@router.get("/rulesets", response_model=RuleSetListResponse, tags=["Rule Sets"])
async def list_rule_sets_v1(
    context: ContextDep,
    validation_type: Annotated[str | None, Query(alias="type")] = None,
    domain: str | None = None,
) -> RuleSetListResponse:
    return await _ruleset_service.list_rule_sets(validation_type=validation_type or domain, context=context)


@router.post(
    "/rulesets",
    response_model=RuleSetResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Rule Sets"],
)
async def create_rule_set_v1(
    request: CreateRuleSetRequest,
    context: ContextDep,
) -> RuleSetResponse:
    return await _ruleset_service.create_rule_set(request=request, context=context)


@router.get("/rulesets/{ruleSetId}", response_model=RuleSetResponse, tags=["Rule Sets"])
async def get_rule_set_v1(
    ruleSetId: str,
    context: ContextDep,
) -> RuleSetResponse:
    return await _ruleset_service.get_rule_set(rule_set_id=ruleSetId, context=context)


@router.patch("/rulesets/{ruleSetId}", response_model=RuleSetResponse, tags=["Rule Sets"])
async def update_rule_set_v1(
    ruleSetId: str,
    request: UpdateRuleSetRequest,
    context: ContextDep,
) -> RuleSetResponse:
    return await _ruleset_service.update_rule_set(rule_set_id=ruleSetId, request=request, context=context)


@router.delete("/rulesets/{ruleSetId}", response_model=DeleteRuleSetResponse, tags=["Rule Sets"])
async def delete_rule_set_v1(
    ruleSetId: str,
    context: ContextDep,
) -> DeleteRuleSetResponse:
    return await _ruleset_service.delete_rule_set(rule_set_id=ruleSetId, context=context)


@router.post(
    "/attestations",
    response_model=AttestationResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Attestation"],
)
async def post_attestation_v1(
    request: AttestationRequest,
    context: ContextDep,
) -> AttestationResponse:
    return await _validation_service.attest(request=request, context=context)
