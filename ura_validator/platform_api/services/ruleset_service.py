"""Rule-set catalog operations for the v1 API."""

from __future__ import annotations

import logging

from ura_validator.platform_api.errors import PlatformAPIError, from_service_error
from ura_validator.platform_api.observability import log_context_event
from ura_validator.platform_api.schemas_v1 import (
    CreateRuleSetRequest,
    DeleteRuleSetResponse,
    RequestContext,
    RuleSet,
    RuleSetListResponse,
    RuleSetResponse,
    UpdateRuleSetRequest,
)
from ura_validator.validation.domains import ValidationDomain, parse_domain
from ura_validator.validation.errors import UnknownRuleSetError, ValidationServiceError
from ura_validator.validation.models import RuleSetParameters
from ura_validator.validation.ruleset_registry import RuleSetRegistry

logger = logging.getLogger(__name__)


def _to_rule_set(record: RuleSetParameters) -> RuleSet:
    return RuleSet(**record.to_contract_payload())


class RuleSetService:
    """Platform-facing service for rule-set listing and mutation."""

    def __init__(self, *, registry: RuleSetRegistry) -> None:
        self._registry = registry

    def _domain(self, value: str, *, context: RequestContext) -> ValidationDomain:
        try:
            return parse_domain(value)
        except ValidationServiceError as exc:
            raise from_service_error(exc, request_id=context.request_id) from exc

    def _not_found(self, rule_set_id: str, *, context: RequestContext) -> PlatformAPIError:
        return from_service_error(UnknownRuleSetError(rule_set_id), request_id=context.request_id)

    async def list_rule_sets(self, *, validation_type: str | None, context: RequestContext) -> RuleSetListResponse:
        domain = self._domain(validation_type, context=context) if validation_type else None
        return RuleSetListResponse(
            requestId=context.request_id,
            items=[_to_rule_set(record) for record in self._registry.list(domain)],
        )

    async def get_rule_set(self, *, rule_set_id: str, context: RequestContext) -> RuleSetResponse:
        record = self._registry.get(rule_set_id)
        if record is None:
            raise self._not_found(rule_set_id, context=context)
        return RuleSetResponse(requestId=context.request_id, ruleSet=_to_rule_set(record))

    async def create_rule_set(self, *, request: CreateRuleSetRequest, context: RequestContext) -> RuleSetResponse:
        domain = self._domain(request.validationType, context=context)
        try:
            record = self._registry.create(
                rule_set_id=request.id,
                display_name=request.name,
                domain=domain,
                description=request.description,
                thresholds=request.parameters,
                active=request.isActive,
            )
        except ValidationServiceError as exc:
            raise from_service_error(exc, request_id=context.request_id) from exc
        log_context_event(
            logger,
            level=logging.INFO,
            message="Rule set created.",
            context=context,
            component="ruleset_service",
            operation="create",
            ruleSetId=record.id,
        )
        return RuleSetResponse(requestId=context.request_id, ruleSet=_to_rule_set(record))

    async def update_rule_set(
        self,
        *,
        rule_set_id: str,
        request: UpdateRuleSetRequest,
        context: RequestContext,
    ) -> RuleSetResponse:
        existing = self._registry.get(rule_set_id)
        if existing is None:
            raise self._not_found(rule_set_id, context=context)
        if request.validationType is not None and self._domain(request.validationType, context=context) != existing.domain:
            raise PlatformAPIError(
                status_code=422,
                code="RULESET_DOMAIN_IMMUTABLE",
                message="A rule set cannot move to a different validation type.",
                details={"ruleSetId": rule_set_id, "validationType": existing.domain.value},
                request_id=context.request_id,
            )
        record = self._registry.update(
            rule_set_id,
            display_name=request.name,
            description=request.description,
            thresholds=request.parameters,
            active=request.isActive,
        )
        if record is None:
            raise self._not_found(rule_set_id, context=context)
        log_context_event(
            logger,
            level=logging.INFO,
            message="Rule set updated.",
            context=context,
            component="ruleset_service",
            operation="update",
            ruleSetId=rule_set_id,
        )
        return RuleSetResponse(requestId=context.request_id, ruleSet=_to_rule_set(record))

    async def delete_rule_set(self, *, rule_set_id: str, context: RequestContext) -> DeleteRuleSetResponse:
        if not self._registry.delete(rule_set_id):
            raise self._not_found(rule_set_id, context=context)
        log_context_event(
            logger,
            level=logging.INFO,
            message="Rule set deleted.",
            context=context,
            component="ruleset_service",
            operation="delete",
            ruleSetId=rule_set_id,
        )
        return DeleteRuleSetResponse(requestId=context.request_id, id=rule_set_id, deleted=True)


__all__ = ["RuleSetService"]
