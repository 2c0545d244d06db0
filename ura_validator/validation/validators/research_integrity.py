"""DeSci research-integrity screening."""

from __future__ import annotations

from typing import Any

from ura_validator.models.plagiarism import PlagiarismDetector
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.models import RuleSetParameters, Verdict
from ura_validator.validation.validators.base import DomainValidator, ValidationContext, check_status

CONFIDENCE = 0.85
CITATION_PASS_SCORE = 0.5


class ResearchIntegrityValidator(DomainValidator):
    domain = ValidationDomain.DESCI_PLAGIARISM

    def __init__(self, detector: PlagiarismDetector | None = None) -> None:
        self._detector = detector or PlagiarismDetector()

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
        title = data.get("title")
        if not isinstance(content, str) or not content.strip() or not isinstance(title, str) or not title.strip():
            return self.reject("Missing content or title")

        plagiarism_score = self._detector.plagiarism_score(content)
        citation_score = self._detector.citation_score(content)
        word_count = self._detector.word_count(content)
        threshold = parameters.number("similarityThreshold", 0.8)
        min_word_count = int(parameters.number("minWordCount", 100))
        is_valid = plagiarism_score < threshold

        if parameters.flag("checkCitations", True):
            citation_check = "passed" if citation_score > CITATION_PASS_SCORE else "warning"
        else:
            citation_check = "skipped"

        return self.create_result(
            is_valid,
            CONFIDENCE,
            {
                "plagiarismScore": plagiarism_score,
                "citationScore": citation_score,
                "threshold": threshold,
                "wordCount": word_count,
                "minWordCount": min_word_count,
                "checks": {
                    "plagiarismDetection": check_status(is_valid),
                    "citationAnalysis": citation_check,
                    "wordCount": "passed" if word_count >= min_word_count else "warning",
                },
            },
        )


__all__ = ["ResearchIntegrityValidator"]
