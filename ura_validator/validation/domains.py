"""Closed set of validation domains and their catalog metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ura_validator.validation.errors import UnknownDomainError


class ValidationDomain(StrEnum):
    DEFI_KYC = "DEFI_KYC"
    DESCI_PLAGIARISM = "DESCI_PLAGIARISM"
    DEPIN_SENSOR = "DEPIN_SENSOR"
    WEB3_SOCIAL = "WEB3_SOCIAL"


@dataclass(frozen=True)
class DomainProfile:
    domain: ValidationDomain
    description: str
    default_rule_set_id: str
    capabilities: tuple[str, ...]

    @property
    def display_name(self) -> str:
        return self.domain.value.replace("_", " ").title()

    def to_contract_payload(self) -> dict[str, object]:
        return {
            "type": self.domain.value,
            "name": self.display_name,
            "description": self.description,
            "defaultRuleSet": self.default_rule_set_id,
            "capabilities": list(self.capabilities),
        }


DOMAIN_PROFILES: dict[ValidationDomain, DomainProfile] = {
    ValidationDomain.DEFI_KYC: DomainProfile(
        domain=ValidationDomain.DEFI_KYC,
        description="Know Your Customer validation for DeFi protocols including sanction screening",
        default_rule_set_id="defi-kyc-v1",
        capabilities=(
            "OFAC sanctions screening",
            "AML risk assessment",
            "Transaction pattern analysis",
            "Geographic risk evaluation",
        ),
    ),
    ValidationDomain.DESCI_PLAGIARISM: DomainProfile(
        domain=ValidationDomain.DESCI_PLAGIARISM,
        description="Plagiarism detection and research integrity validation for decentralized science",
        default_rule_set_id="desci-plagiarism-v1",
        capabilities=(
            "Text similarity detection",
            "Citation analysis",
            "Academic integrity assessment",
        ),
    ),
    ValidationDomain.DEPIN_SENSOR: DomainProfile(
        domain=ValidationDomain.DEPIN_SENSOR,
        description="IoT sensor data validation and anomaly detection for physical infrastructure",
        default_rule_set_id="depin-sensor-v1",
        capabilities=(
            "Anomaly detection",
            "Peer consensus validation",
        ),
    ),
    ValidationDomain.WEB3_SOCIAL: DomainProfile(
        domain=ValidationDomain.WEB3_SOCIAL,
        description="Content moderation and toxicity detection for decentralized social platforms",
        default_rule_set_id="web3-social-v1",
        capabilities=(
            "Toxicity detection",
            "Spam identification",
            "Harassment detection",
            "Content policy compliance",
        ),
    ),
}


def parse_domain(value: object) -> ValidationDomain:
    """Resolve a raw domain value, accepting enum members and case-insensitive names."""
    if isinstance(value, ValidationDomain):
        return value
    if isinstance(value, str):
        token = value.strip().upper().replace("-", "_")
        try:
            return ValidationDomain(token)
        except ValueError:
            pass
    raise UnknownDomainError(value)


__all__ = ["DOMAIN_PROFILES", "DomainProfile", "ValidationDomain", "parse_domain"]
