"""Web3 social content moderation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ura_validator.models.moderation import ContentModerator
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.errors import CapabilityError
from ura_validator.validation.models import RuleSetParameters, Verdict, clamp_confidence
from ura_validator.validation.validators.base import DomainValidator, ValidationContext, check_status

if TYPE_CHECKING:
    from ura_validator.agents.capability_adapter import AIReview, AICapabilityAdapter

logger = logging.getLogger(__name__)

HEURISTIC_CONFIDENCE = 0.9


def _score(details: dict[str, Any], key: str, fallback: float) -> float:
    value = details.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    return clamp_confidence(value)


class SocialContentValidator(DomainValidator):
    domain = ValidationDomain.WEB3_SOCIAL

    def __init__(
        self,
        *,
        moderator: ContentModerator | None = None,
        ai_adapter: AICapabilityAdapter | None = None,
    ) -> None:
        self._moderator = moderator or ContentModerator()
        self._ai_adapter = ai_adapter

    async def validate(
        self,
        payload: Any,
        parameters: RuleSetParameters,
        context: ValidationContext,
    ) -> Verdict:
        data = self.as_mapping(payload)
        if data is None:
            return self.reject("Payload must be an object")
        content = data.get("content")
        if not isinstance(content, str) or content.strip() == "":
            return self.reject("No content provided")

        toxicity_threshold = parameters.number("toxicityThreshold", 0.8)
        spam_threshold = parameters.number("spamThreshold", 0.7)
        check_spam = parameters.flag("checkSpam", True)

        toxicity_score = self._moderator.toxicity_score(content)
        spam_score = self._moderator.spam_score(content)
        confidence = HEURISTIC_CONFIDENCE
        details: dict[str, Any] = {"spamSignals": self._moderator.spam_signals(content)}
        review: AIReview | None = None

        if self._ai_adapter is not None and parameters.flag("aiEnabled", True):
            try:
                review = await self._ai_adapter.review(self.domain, data, dict(context.metadata))
            except CapabilityError as exc:
                logger.warning(
                    "AI moderation unavailable; falling back to heuristic scoring.",
                    extra={
                        "requestId": context.request_id,
                        "component": "social_validator",
                        "operation": "ai_review",
                        "errorCode": exc.code,
                    },
                )
                details["fallbackUsed"] = True
                details["aiError"] = exc.message

        if review is not None:
            ai_details = dict(review.details)
            toxicity_score = _score(ai_details, "toxicityScore", toxicity_score)
            spam_score = _score(ai_details, "spamScore", spam_score)
            confidence = review.confidence
            details.update(
                {
                    "harassmentScore": _score(ai_details, "harassmentScore", 0.0),
                    "contentCategory": ai_details.get("contentCategory", "unknown"),
                    "recommendedActions": ai_details.get("recommendedActions", []),
                    "reasoning": review.reasoning,
                    "flags": list(review.flags),
                    "scoringSource": "ai",
                    "fallbackUsed": False,
                }
            )
        else:
            details["scoringSource"] = "heuristic"

        toxicity_passed = toxicity_score < toxicity_threshold
        spam_passed = spam_score < spam_threshold or not check_spam
        is_valid = toxicity_passed and spam_passed
        if review is not None:
            is_valid = is_valid and review.is_valid

        details.update(
            {
                "toxicityScore": toxicity_score,
                "spamScore": spam_score,
                "toxicityThreshold": toxicity_threshold,
                "spamThreshold": spam_threshold,
                "contentLength": len(content),
                "checks": {
                    "toxicityDetection": check_status(toxicity_passed),
                    "spamDetection": check_status(spam_passed) if check_spam else "skipped",
                },
            }
        )
        if not is_valid:
            details["appealable"] = parameters.flag("allowAppeal", True)
        return self.create_result(is_valid, confidence, details)


__all__ = ["SocialContentValidator"]
