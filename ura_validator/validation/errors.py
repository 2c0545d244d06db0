"""Error taxonomy for the validation core."""

from __future__ import annotations

from typing import Any


class ValidationServiceError(Exception):
    """Base error carrying a stable machine-readable code."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})


class InputError(ValidationServiceError):
    """Request fields are missing, empty, or malformed."""

    code = "INPUT_INVALID"


class MissingFieldError(InputError):
    code = "MISSING_FIELD"

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required field: {field_name}", details={"field": field_name})
        self.field_name = field_name


class EmptyPayloadError(InputError):
    code = "EMPTY_PAYLOAD"


class MalformedPayloadError(InputError):
    code = "MALFORMED_PAYLOAD"


class ConfigError(ValidationServiceError):
    """The caller referenced configuration that does not exist or cannot be used."""

    code = "CONFIG_INVALID"


class UnknownDomainError(ConfigError):
    code = "UNKNOWN_DOMAIN"

    def __init__(self, domain: object) -> None:
        super().__init__(f"Unknown validation domain: {domain!r}", details={"domain": str(domain)})


class UnknownRuleSetError(ConfigError):
    code = "RULESET_NOT_FOUND"

    def __init__(self, rule_set_id: str) -> None:
        super().__init__(f"Rule set not found: {rule_set_id}", details={"ruleSetId": rule_set_id})
        self.rule_set_id = rule_set_id


class RuleSetDomainMismatchError(ConfigError):
    code = "RULESET_DOMAIN_MISMATCH"

    def __init__(self, *, rule_set_id: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Rule set {rule_set_id} belongs to domain {actual}, not {expected}.",
            details={"ruleSetId": rule_set_id, "expectedDomain": expected, "ruleSetDomain": actual},
        )


class InactiveRuleSetError(ConfigError):
    code = "RULESET_INACTIVE"

    def __init__(self, rule_set_id: str) -> None:
        super().__init__(f"Rule set is inactive: {rule_set_id}", details={"ruleSetId": rule_set_id})


class RuleSetConflictError(ValidationServiceError):
    code = "RULESET_CONFLICT"

    def __init__(self, rule_set_id: str) -> None:
        super().__init__(f"Rule set with ID {rule_set_id} already exists", details={"ruleSetId": rule_set_id})
        self.rule_set_id = rule_set_id


class CapabilityError(ValidationServiceError):
    """The AI capability failed, timed out, or is not configured."""

    code = "AI_CAPABILITY_ERROR"


class NoValidatorError(ValidationServiceError):
    code = "NO_VALIDATOR"

    def __init__(self, domain: object) -> None:
        super().__init__(f"No validator registered for domain: {domain}", details={"domain": str(domain)})


__all__ = [
    "CapabilityError",
    "ConfigError",
    "EmptyPayloadError",
    "InactiveRuleSetError",
    "InputError",
    "MalformedPayloadError",
    "MissingFieldError",
    "NoValidatorError",
    "RuleSetConflictError",
    "RuleSetDomainMismatchError",
    "UnknownDomainError",
    "UnknownRuleSetError",
    "ValidationServiceError",
]
