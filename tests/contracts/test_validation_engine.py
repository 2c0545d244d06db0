"""Contract tests for the validation dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from ura_validator.agents.capability_adapter import AICapabilityAdapter
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.engine import ValidationEngine
from ura_validator.validation.errors import (
    InactiveRuleSetError,
    NoValidatorError,
    RuleSetDomainMismatchError,
    UnknownDomainError,
    UnknownRuleSetError,
)
from ura_validator.validation.models import RuleSetParameters, ValidationRequest, Verdict
from ura_validator.validation.proof import verify_proof
from ura_validator.validation.ruleset_registry import RuleSetRegistry
from ura_validator.validation.validators.base import DomainValidator, ValidationContext
from ura_validator.validation.validators.registry import ValidatorRegistry, build_default_validators
from ura_validator.validation.validators.social_content import SocialContentValidator

CLEAN_WALLET = "0x0000000000000000000000000000000000001234"


class _FixedValidator(DomainValidator):
    def __init__(self, domain: ValidationDomain, verdict: Verdict) -> None:
        self.domain = domain
        self.verdict = verdict
        self.seen: list[tuple[Any, RuleSetParameters, ValidationContext]] = []

    async def validate(self, payload: Any, parameters: RuleSetParameters, context: ValidationContext) -> Verdict:
        self.seen.append((payload, parameters, context))
        return self.verdict


class _CrashingValidator(DomainValidator):
    domain = ValidationDomain.DESCI_PLAGIARISM

    async def validate(self, payload: Any, parameters: RuleSetParameters, context: ValidationContext) -> Verdict:
        raise RuntimeError("index out of range")


class _BlockingCapability:
    def __init__(self) -> None:
        self.started: asyncio.Event | None = None
        self.cancelled = False

    async def complete(self, prompt: str, *, system: str, temperature: float, max_tokens: int) -> str:
        assert self.started is not None
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return "{}"


class _RegistryMutatingValidator(DomainValidator):
    domain = ValidationDomain.DEPIN_SENSOR

    def __init__(self, registry: RuleSetRegistry) -> None:
        self.registry = registry

    async def validate(self, payload: Any, parameters: RuleSetParameters, context: ValidationContext) -> Verdict:
        self.registry.update(parameters.id, thresholds={"anomalyThreshold": 0.01})
        await asyncio.sleep(0)
        return self.create_result(True, 0.8, {"threshold": parameters.number("anomalyThreshold", 0.9)})


def _default_validators() -> dict[ValidationDomain, DomainValidator]:
    defaults = build_default_validators()
    return {domain: defaults.get(domain) for domain in defaults.domains()}


def _engine(**overrides: DomainValidator) -> ValidationEngine:
    validators = _default_validators()
    validators.update({ValidationDomain(key): value for key, value in overrides.items()})
    return ValidationEngine(validators=ValidatorRegistry(validators), rule_sets=RuleSetRegistry())


def _kyc_request(**overrides: Any) -> ValidationRequest:
    fields: dict[str, Any] = {
        "payload": {"walletAddress": CLEAN_WALLET},
        "rule_set_id": "defi-kyc-v1",
        "domain": "DEFI_KYC",
        "metadata": {"requestId": "req-engine-001"},
    }
    fields.update(overrides)
    return ValidationRequest(**fields)


def test_validate_returns_normalized_verdict_and_verifiable_proof() -> None:
    request = _kyc_request()

    outcome = asyncio.run(_engine().validate(request))

    assert outcome.verdict.is_valid is True
    assert outcome.verdict.details["ruleSetId"] == "defi-kyc-v1"
    assert outcome.verdict.details["domain"] == "DEFI_KYC"
    assert outcome.verdict.details["processingTimeMs"] >= 0
    assert outcome.proof is not None
    assert outcome.proof.rule_set_id == "defi-kyc-v1"
    assert outcome.proof.timestamp == outcome.verdict.timestamp
    assert verify_proof(request.payload, outcome.proof, is_valid=True)


def test_domain_aliases_are_accepted() -> None:
    outcome = asyncio.run(_engine().validate(_kyc_request(domain="defi-kyc")))

    assert outcome.verdict.details["domain"] == "DEFI_KYC"


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"payload": None}, "MISSING_FIELD"),
        ({"rule_set_id": " "}, "MISSING_FIELD"),
        ({"domain": None}, "MISSING_FIELD"),
        ({"payload": {}}, "EMPTY_PAYLOAD"),
        ({"payload": "   "}, "EMPTY_PAYLOAD"),
    ],
)
def test_input_errors_become_failed_verdicts(overrides: dict[str, Any], code: str) -> None:
    outcome = asyncio.run(_engine().validate(_kyc_request(**overrides)))

    assert outcome.verdict.is_valid is False
    assert outcome.verdict.confidence == 0.0
    assert outcome.verdict.details["errorCode"] == code
    assert outcome.verdict.errors


def test_unserializable_payload_fails_without_proof() -> None:
    outcome = asyncio.run(_engine().validate(_kyc_request(payload={"walletAddress": float("nan")})))

    assert outcome.verdict.is_valid is False
    assert outcome.verdict.details["errorCode"] == "MALFORMED_PAYLOAD"
    assert outcome.proof is None


@pytest.mark.parametrize(
    ("overrides", "error_type"),
    [
        ({"domain": "DEFI_AML"}, UnknownDomainError),
        ({"rule_set_id": "defi-kyc-v9"}, UnknownRuleSetError),
        ({"rule_set_id": "web3-social-v1"}, RuleSetDomainMismatchError),
    ],
)
def test_config_errors_propagate(overrides: dict[str, Any], error_type: type[Exception]) -> None:
    with pytest.raises(error_type):
        asyncio.run(_engine().validate(_kyc_request(**overrides)))


def test_inactive_rule_set_is_rejected() -> None:
    engine = _engine()
    engine.rule_sets.update("defi-kyc-v1", active=False)

    with pytest.raises(InactiveRuleSetError):
        asyncio.run(engine.validate(_kyc_request()))


def test_confidence_is_clamped_and_validator_details_win() -> None:
    fixed = _FixedValidator(
        ValidationDomain.WEB3_SOCIAL,
        Verdict(is_valid=True, confidence=1.7, details={"domain": "custom"}),
    )
    engine = _engine(WEB3_SOCIAL=fixed)

    outcome = asyncio.run(
        engine.validate(ValidationRequest(payload={"content": "gm"}, rule_set_id="web3-social-v1", domain="WEB3_SOCIAL"))
    )

    assert outcome.verdict.confidence == 1.0
    assert outcome.verdict.timestamp is not None
    assert outcome.verdict.details["domain"] == "custom"
    assert outcome.verdict.details["ruleSetId"] == "web3-social-v1"
    payload, parameters, context = fixed.seen[0]
    assert payload == {"content": "gm"}
    assert parameters.id == "web3-social-v1"
    assert context.request_id.startswith("val-")


def test_validator_crash_becomes_failed_verdict(caplog: pytest.LogCaptureFixture) -> None:
    engine = _engine(DESCI_PLAGIARISM=_CrashingValidator())
    caplog.set_level(logging.ERROR, logger="ura_validator.validation.engine")

    outcome = asyncio.run(
        engine.validate(
            ValidationRequest(
                payload={"title": "t", "content": "c"},
                rule_set_id="desci-plagiarism-v1",
                domain="DESCI_PLAGIARISM",
            )
        )
    )

    assert outcome.verdict.is_valid is False
    assert outcome.verdict.confidence == 0.0
    assert outcome.verdict.details["errorCode"] == "VALIDATOR_ERROR"
    assert "index out of range" in outcome.verdict.errors[0]
    assert outcome.proof is not None
    crash_records = [record for record in caplog.records if record.getMessage() == "Validator crashed."]
    assert crash_records and getattr(crash_records[0], "domain") == "DESCI_PLAGIARISM"


def test_validator_sees_a_snapshot_of_the_rule_set() -> None:
    rule_sets = RuleSetRegistry()
    validators = _default_validators()
    validators[ValidationDomain.DEPIN_SENSOR] = _RegistryMutatingValidator(rule_sets)
    engine = ValidationEngine(validators=ValidatorRegistry(validators), rule_sets=rule_sets)

    outcome = asyncio.run(
        engine.validate(ValidationRequest(payload={"sensorId": "s"}, rule_set_id="depin-sensor-v1", domain="DEPIN_SENSOR"))
    )

    assert outcome.verdict.details["threshold"] == 0.9
    assert rule_sets.get("depin-sensor-v1").thresholds["anomalyThreshold"] == 0.01


def test_batch_preserves_order_and_isolates_failures() -> None:
    requests = [
        _kyc_request(metadata={}),
        _kyc_request(rule_set_id="missing-rule-set", metadata={}),
        ValidationRequest(
            payload={"sensorId": "sensor-9", "readings": [20, 20.5], "peerReadings": [20]},
            rule_set_id="depin-sensor-v1",
            domain="DEPIN_SENSOR",
        ),
    ]

    verdicts = asyncio.run(_engine().batch_validate(requests))

    assert len(verdicts) == 3
    assert [verdict.details["requestIndex"] for verdict in verdicts] == [0, 1, 2]
    assert verdicts[0].is_valid is True
    assert verdicts[1].is_valid is False
    assert verdicts[1].details["errorCode"] == "RULESET_NOT_FOUND"
    assert verdicts[2].is_valid is True
    assert verdicts[2].details["domain"] == "DEPIN_SENSOR"


def test_registry_requires_every_domain() -> None:
    with pytest.raises(NoValidatorError):
        ValidatorRegistry({ValidationDomain.DEFI_KYC: _CrashingValidator()})


def test_available_domains_lists_all_profiles() -> None:
    profiles = _engine().available_domains()

    assert {profile.domain for profile in profiles} == set(ValidationDomain)


@pytest.mark.parametrize(
    ("overrides", "domain"),
    [
        ({"payload": {}}, "DEFI_KYC"),
        ({"payload": {"walletAddress": float("nan")}, "domain": "defi-kyc"}, "DEFI_KYC"),
        ({"payload": None, "domain": "WEB3_SOCIAL", "rule_set_id": "web3-social-v1"}, "WEB3_SOCIAL"),
        ({"domain": None}, None),
    ],
)
def test_input_error_verdicts_report_the_resolved_domain(overrides: dict[str, Any], domain: str | None) -> None:
    outcome = asyncio.run(_engine().validate(_kyc_request(**overrides)))

    assert outcome.verdict.is_valid is False
    assert outcome.verdict.details["domain"] == domain


def test_cancelling_a_batch_cancels_pending_items() -> None:
    fast = _FixedValidator(ValidationDomain.DEFI_KYC, Verdict(is_valid=True, confidence=0.9))
    capability = _BlockingCapability()
    engine = _engine(
        DEFI_KYC=fast,
        WEB3_SOCIAL=SocialContentValidator(ai_adapter=AICapabilityAdapter(capability=capability, timeout_seconds=60)),
    )
    requests = [
        _kyc_request(metadata={}),
        ValidationRequest(payload={"content": "gm"}, rule_set_id="web3-social-v1", domain="WEB3_SOCIAL"),
    ]

    async def _cancel_mid_batch() -> None:
        capability.started = asyncio.Event()
        task = asyncio.create_task(engine.batch_validate(requests))
        await capability.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(_cancel_mid_batch())

    assert capability.cancelled is True
    assert len(fast.seen) == 1
    assert engine.rule_sets.get("web3-social-v1").active is True
