from __future__ import annotations

import asyncio

from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.models import RuleSetParameters
from ura_validator.validation.validators.base import ValidationContext
from ura_validator.validation.validators.research_integrity import ResearchIntegrityValidator


def _parameters(**thresholds: object) -> RuleSetParameters:
    return RuleSetParameters(
        id="desci-test",
        display_name="DeSci Test",
        description="",
        domain=ValidationDomain.DESCI_PLAGIARISM,
        thresholds={"similarityThreshold": 0.8, "checkCitations": True, "minWordCount": 100, **thresholds},
    )


def _context() -> ValidationContext:
    return ValidationContext(
        request_id="req-desci-001",
        domain=ValidationDomain.DESCI_PLAGIARISM,
        rule_set_id="desci-test",
    )


def _manuscript(words: int, extra: str = "") -> str:
    return " ".join(f"token{index}" for index in range(words)) + extra


def test_original_manuscript_passes() -> None:
    payload = {"title": "On Validators", "content": _manuscript(120, " [1] (Nakamoto, 2008)")}

    verdict = asyncio.run(ResearchIntegrityValidator().validate(payload, _parameters(), _context()))

    assert verdict.is_valid is True
    assert verdict.confidence == 0.85
    assert verdict.details["plagiarismScore"] == 0.0
    assert verdict.details["threshold"] == 0.8
    assert verdict.details["wordCount"] == 123
    assert verdict.details["checks"] == {
        "plagiarismDetection": "passed",
        "citationAnalysis": "passed",
        "wordCount": "passed",
    }


def test_suspicious_phrases_fail_a_strict_threshold() -> None:
    content = _manuscript(120, " copy paste lorem ipsum sample text placeholder content")
    payload = {"title": "Borrowed", "content": content}

    lenient = asyncio.run(ResearchIntegrityValidator().validate(payload, _parameters(), _context()))
    strict = asyncio.run(
        ResearchIntegrityValidator().validate(payload, _parameters(similarityThreshold=0.3), _context())
    )

    assert lenient.is_valid is True
    assert lenient.details["plagiarismScore"] == 0.4
    assert strict.is_valid is False
    assert strict.details["checks"]["plagiarismDetection"] == "failed"


def test_short_uncited_content_only_warns() -> None:
    payload = {"title": "Note", "content": "A short note without references."}

    verdict = asyncio.run(ResearchIntegrityValidator().validate(payload, _parameters(), _context()))

    assert verdict.is_valid is True
    assert verdict.details["checks"]["wordCount"] == "warning"
    assert verdict.details["checks"]["citationAnalysis"] == "warning"


def test_citation_check_can_be_disabled() -> None:
    payload = {"title": "Note", "content": "A short note."}

    verdict = asyncio.run(
        ResearchIntegrityValidator().validate(payload, _parameters(checkCitations=False), _context())
    )

    assert verdict.details["checks"]["citationAnalysis"] == "skipped"


def test_missing_title_is_rejected() -> None:
    verdict = asyncio.run(
        ResearchIntegrityValidator().validate({"content": _manuscript(10)}, _parameters(), _context())
    )

    assert verdict.is_valid is False
    assert verdict.confidence == 0.0
    assert verdict.details["error"] == "Missing content or title"
