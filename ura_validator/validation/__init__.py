"""Validation core public exports."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

_EXPORTS: dict[str, str] = {
    "DOMAIN_PROFILES": "ura_validator.validation.domains",
    "ValidationDomain": "ura_validator.validation.domains",
    "parse_domain": "ura_validator.validation.domains",
    "ProofRecord": "ura_validator.validation.models",
    "RuleSetParameters": "ura_validator.validation.models",
    "ValidationOutcome": "ura_validator.validation.models",
    "ValidationRequest": "ura_validator.validation.models",
    "Verdict": "ura_validator.validation.models",
    "RuleSetRegistry": "ura_validator.validation.ruleset_registry",
    "ValidationEngine": "ura_validator.validation.engine",
    "build_proof": "ura_validator.validation.proof",
    "data_hash": "ura_validator.validation.proof",
    "verify_proof": "ura_validator.validation.proof",
    "ValidatorRegistry": "ura_validator.validation.validators.registry",
    "build_default_validators": "ura_validator.validation.validators.registry",
}

__all__ = sorted(_EXPORTS)

if TYPE_CHECKING:
    from ura_validator.validation.domains import DOMAIN_PROFILES, ValidationDomain, parse_domain
    from ura_validator.validation.engine import ValidationEngine
    from ura_validator.validation.models import (
        ProofRecord,
        RuleSetParameters,
        ValidationOutcome,
        ValidationRequest,
        Verdict,
    )
    from ura_validator.validation.proof import build_proof, data_hash, verify_proof
    from ura_validator.validation.ruleset_registry import RuleSetRegistry
    from ura_validator.validation.validators.registry import ValidatorRegistry, build_default_validators


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is not None:
        return getattr(import_module(module_name), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
