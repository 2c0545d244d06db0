"""Closed domain → validator mapping built once and injected into the engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from ura_validator.models.anomaly import PeerReadingSource
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import NoValidatorError
from ura_validator.validation.validators.base import DomainValidator
from ura_validator.validation.validators.compliance import ComplianceValidator
from ura_validator.validation.validators.research_integrity import ResearchIntegrityValidator
from ura_validator.validation.validators.sensor_telemetry import SensorTelemetryValidator
from ura_validator.validation.validators.social_content import SocialContentValidator

if TYPE_CHECKING:
    from ura_validator.agents.capability_adapter import AICapabilityAdapter


class ValidatorRegistry:
    """Immutable lookup covering every ``ValidationDomain`` member."""

    def __init__(self, validators: Mapping[ValidationDomain, DomainValidator]) -> None:
        missing = [domain.value for domain in ValidationDomain if domain not in validators]
        if missing:
            raise NoValidatorError(", ".join(missing))
        self._validators = MappingProxyType(dict(validators))

    def get(self, domain: ValidationDomain) -> DomainValidator:
        validator = self._validators.get(domain)
        if validator is None:
            raise NoValidatorError(domain)
        return validator

    def domains(self) -> list[ValidationDomain]:
        return list(self._validators)


def build_default_validators(
    *,
    sanctioned_addresses: Iterable[str] = (),
    ai_adapter: AICapabilityAdapter | None = None,
    peer_source: PeerReadingSource | None = None,
) -> ValidatorRegistry:
    return ValidatorRegistry(
        {
            ValidationDomain.DEFI_KYC: ComplianceValidator(
                sanctioned_addresses=sanctioned_addresses,
                ai_adapter=ai_adapter,
            ),
            ValidationDomain.DESCI_PLAGIARISM: ResearchIntegrityValidator(),
            ValidationDomain.DEPIN_SENSOR: SensorTelemetryValidator(peer_source=peer_source),
            ValidationDomain.WEB3_SOCIAL: SocialContentValidator(ai_adapter=ai_adapter),
        }
    )


__all__ = ["ValidatorRegistry", "build_default_validators"]
