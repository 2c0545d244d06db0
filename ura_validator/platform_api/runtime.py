"""Construct-once wiring of registry, validators, engine, and services."""

from __future__ import annotations

from dataclasses import dataclass

from ura_validator.agents.factory import build_ai_adapter
from ura_validator.config import Settings
from ura_validator.platform_api.adapters.attestation_adapter import (
    AttestationAdapter,
    HttpAttestationAdapter,
    InMemoryAttestationAdapter,
)
from ura_validator.platform_api.services.ruleset_service import RuleSetService
from ura_validator.platform_api.services.validation_service import ValidationService
from ura_validator.validation.engine import ValidationEngine
from ura_validator.validation.ruleset_registry import RuleSetRegistry
from ura_validator.validation.validators.registry import build_default_validators


@dataclass(frozen=True)
class ValidatorRuntime:
    settings: Settings
    registry: RuleSetRegistry
    engine: ValidationEngine
    validation_service: ValidationService
    ruleset_service: RuleSetService


def build_attestation_adapter(settings: Settings) -> AttestationAdapter:
    if settings.attestation_base_url.strip():
        return HttpAttestationAdapter(
            base_url=settings.attestation_base_url,
            api_key=settings.attestation_api_key,
            timeout_seconds=settings.attestation_timeout_seconds,
        )
    return InMemoryAttestationAdapter()


def build_runtime(settings: Settings) -> ValidatorRuntime:
    registry = RuleSetRegistry()
    validators = build_default_validators(
        sanctioned_addresses=settings.sanctioned_addresses,
        ai_adapter=build_ai_adapter(settings),
    )
    engine = ValidationEngine(validators=validators, rule_sets=registry)
    return ValidatorRuntime(
        settings=settings,
        registry=registry,
        engine=engine,
        validation_service=ValidationService(
            engine=engine,
            attestation_adapter=build_attestation_adapter(settings),
            validator_name=settings.validator_name,
        ),
        ruleset_service=RuleSetService(registry=registry),
    )


__all__ = ["ValidatorRuntime", "build_attestation_adapter", "build_runtime"]
