"""In-memory rule-set catalog seeded with one default bundle per domain."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import replace

from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import RuleSetConflictError
from ura_validator.validation.models import RuleSetParameters, ThresholdValue, utc_now

logger = logging.getLogger(__name__)

DEFAULT_RULE_SETS: tuple[RuleSetParameters, ...] = (
    RuleSetParameters(
        id="defi-kyc-v1",
        display_name="DeFi KYC Validation",
        description="Standard KYC validation for DeFi protocols including OFAC screening",
        domain=ValidationDomain.DEFI_KYC,
        thresholds={
            "checkOFAC": True,
            "riskThreshold": 0.7,
            "requireDocuments": False,
            "aiEnabled": True,
        },
    ),
    RuleSetParameters(
        id="desci-plagiarism-v1",
        display_name="DeSci Plagiarism Detection",
        description="Plagiarism detection for scientific papers and research",
        domain=ValidationDomain.DESCI_PLAGIARISM,
        thresholds={
            "similarityThreshold": 0.8,
            "checkCitations": True,
            "minWordCount": 100,
        },
    ),
    RuleSetParameters(
        id="depin-sensor-v1",
        display_name="DePIN Sensor Validation",
        description="IoT sensor data validation and anomaly detection",
        domain=ValidationDomain.DEPIN_SENSOR,
        thresholds={
            "anomalyThreshold": 0.9,
            "consensusThreshold": 0.6,
            "consensusTolerance": 5.0,
            "timeWindowMinutes": 60,
            "requireConsensus": True,
        },
    ),
    RuleSetParameters(
        id="web3-social-v1",
        display_name="Web3 Social Moderation",
        description="Content moderation for decentralized social platforms",
        domain=ValidationDomain.WEB3_SOCIAL,
        thresholds={
            "toxicityThreshold": 0.8,
            "spamThreshold": 0.7,
            "checkSpam": True,
            "allowAppeal": True,
            "aiEnabled": True,
        },
    ),
)


class RuleSetRegistry:
    """Thread-safe rule-set catalog.

    Every read hands out a copy, so a caller holding a snapshot never observes
    a later update. Writers are serialized by a single re-entrant lock, which
    also makes ``update`` an atomic read-modify-write per id.
    """

    def __init__(self, seed: tuple[RuleSetParameters, ...] | None = None) -> None:
        self._lock = threading.RLock()
        self._rule_sets: dict[str, RuleSetParameters] = {}
        now = utc_now()
        for rule_set in DEFAULT_RULE_SETS if seed is None else seed:
            self._rule_sets[rule_set.id] = replace(rule_set, created_at=now, updated_at=now)

    def list(self, domain: ValidationDomain | None = None) -> list[RuleSetParameters]:
        with self._lock:
            records = list(self._rule_sets.values())
        if domain is not None:
            records = [record for record in records if record.domain == domain]
        return [replace(record) for record in records]

    def get(self, rule_set_id: str) -> RuleSetParameters | None:
        with self._lock:
            record = self._rule_sets.get(rule_set_id)
        return replace(record) if record is not None else None

    def snapshot(self, rule_set_id: str) -> RuleSetParameters | None:
        """Copy of the parameters used for exactly one validation run."""
        return self.get(rule_set_id)

    def create(
        self,
        *,
        rule_set_id: str,
        display_name: str,
        domain: ValidationDomain,
        description: str = "",
        thresholds: Mapping[str, ThresholdValue] | None = None,
        active: bool = True,
    ) -> RuleSetParameters:
        with self._lock:
            if rule_set_id in self._rule_sets:
                raise RuleSetConflictError(rule_set_id)
            now = utc_now()
            record = RuleSetParameters(
                id=rule_set_id,
                display_name=display_name,
                description=description,
                domain=domain,
                thresholds=dict(thresholds or {}),
                active=active,
                created_at=now,
                updated_at=now,
            )
            self._rule_sets[rule_set_id] = record
        logger.info(
            "Rule set created.",
            extra={"component": "ruleset_registry", "operation": "create", "ruleSetId": rule_set_id},
        )
        return replace(record)

    def update(
        self,
        rule_set_id: str,
        *,
        display_name: str | None = None,
        description: str | None = None,
        thresholds: Mapping[str, ThresholdValue] | None = None,
        active: bool | None = None,
    ) -> RuleSetParameters | None:
        with self._lock:
            existing = self._rule_sets.get(rule_set_id)
            if existing is None:
                return None
            merged = dict(existing.thresholds)
            if thresholds:
                merged.update(thresholds)
            updated = replace(
                existing,
                display_name=display_name if display_name is not None else existing.display_name,
                description=description if description is not None else existing.description,
                thresholds=merged,
                active=active if active is not None else existing.active,
                updated_at=utc_now(),
            )
            self._rule_sets[rule_set_id] = updated
        logger.info(
            "Rule set updated.",
            extra={"component": "ruleset_registry", "operation": "update", "ruleSetId": rule_set_id},
        )
        return replace(updated)

    def delete(self, rule_set_id: str) -> bool:
        with self._lock:
            removed = self._rule_sets.pop(rule_set_id, None)
        return removed is not None


__all__ = ["DEFAULT_RULE_SETS", "RuleSetRegistry"]
