"""DeFi KYC screening: sanctions, pseudo-risk, and optional AI review."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ura_validator.models.risk import WalletRiskScorer
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import CapabilityError
from ura_validator.validation.models import RuleSetParameters, Verdict
from ura_validator.validation.validators.base import DomainValidator, ValidationContext, check_status

if TYPE_CHECKING:
    from ura_validator.agents.capability_adapter import AICapabilityAdapter

logger = logging.getLogger(__name__)

HEURISTIC_CONFIDENCE = 0.9
SANCTIONED_CONFIDENCE = 1.0


class ComplianceValidator(DomainValidator):
    domain = ValidationDomain.DEFI_KYC

    def __init__(
        self,
        *,
        sanctioned_addresses: Iterable[str] = (),
        ai_adapter: AICapabilityAdapter | None = None,
    ) -> None:
        self._scorer = WalletRiskScorer(sanctioned_addresses)
        self._ai_adapter = ai_adapter

    def _scorer_for(self, parameters: RuleSetParameters) -> WalletRiskScorer:
        override = parameters.thresholds.get("sanctionedAddresses")
        if isinstance(override, str) and override.strip():
            return WalletRiskScorer(override.split(","))
        return self._scorer

    async def validate(
        self,
        payload: Any,
        parameters: RuleSetParameters,
        context: ValidationContext,
    ) -> Verdict:
        data = self.as_mapping(payload)
        if data is None:
            return self.reject("Payload must be an object")
        address = data.get("walletAddress")
        if not isinstance(address, str) or address.strip() == "":
            return self.reject("No wallet address provided")
        address = address.strip()

        scorer = self._scorer_for(parameters)
        address_validation = scorer.classify_address(address)
        check_ofac = parameters.flag("checkOFAC", True)

        if check_ofac and scorer.is_sanctioned(address):
            logger.warning(
                "Sanctioned wallet rejected.",
                extra={
                    "requestId": context.request_id,
                    "component": "compliance_validator",
                    "operation": "sanctions_screen",
                    "ruleSetId": parameters.id,
                },
            )
            return self.create_result(
                False,
                SANCTIONED_CONFIDENCE,
                {
                    "reason": "Address found on OFAC sanctions list",
                    "sanctionType": "OFAC",
                    "addressValidation": address_validation,
                    "checks": {"ofacSanctions": "failed"},
                },
            )

        risk_score = scorer.risk_score(address)
        risk_threshold = parameters.number("riskThreshold", 0.7)
        risk_passed = risk_score < risk_threshold
        flags: list[str] = []

        documents_check = "skipped"
        if parameters.flag("requireDocuments", False):
            documents_present = bool(data.get("documents"))
            documents_check = check_status(documents_present)
            if not documents_present:
                flags.append("DOCUMENTS_MISSING")

        details: dict[str, Any] = {
            "riskScore": risk_score,
            "riskThreshold": risk_threshold,
            "addressValidation": address_validation,
            "additionalRiskFactors": scorer.additional_risk_factors(data),
            "checks": {
                "ofacSanctions": "passed" if check_ofac else "skipped",
                "riskAssessment": check_status(risk_passed),
                "documents": documents_check,
            },
        }
        is_valid = risk_passed and documents_check != "failed"

        if self._ai_adapter is not None and parameters.flag("aiEnabled", True):
            try:
                review = await self._ai_adapter.review(self.domain, data, dict(context.metadata))
            except CapabilityError as exc:
                logger.warning(
                    "AI compliance review unavailable; keeping heuristic verdict.",
                    extra={
                        "requestId": context.request_id,
                        "component": "compliance_validator",
                        "operation": "ai_review",
                        "errorCode": exc.code,
                    },
                )
                details["fallbackUsed"] = True
                details["aiError"] = exc.message
            else:
                ai_details = review.details
                details["aiAnalysis"] = {
                    key: ai_details.get(key)
                    for key in ("riskScore", "ofacStatus", "geographicRisk", "amlFlags")
                    if key in ai_details
                }
                details["aiAnalysis"]["isValid"] = review.is_valid
                details["aiAnalysis"]["confidence"] = review.confidence
                details["aiAnalysis"]["reasoning"] = review.reasoning
                for flag in review.flags:
                    if flag not in flags:
                        flags.append(flag)
                details["fallbackUsed"] = False

        details["flags"] = flags
        return self.create_result(is_valid, HEURISTIC_CONFIDENCE, details)


__all__ = ["ComplianceValidator"]
