"""Research-integrity heuristics for manuscripts."""

import re

SUSPICIOUS_PHRASES: tuple[str, ...] = (
    "copy paste",
    "lorem ipsum",
    "sample text",
    "placeholder content",
)

CITATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\[\d+\]"),
    re.compile(r"\(\w+,?\s*\d{4}\)"),
    re.compile(r"doi:\s*10\.\d+", re.IGNORECASE),
)


class PlagiarismDetector:
    """Phrase and citation analysis for research content.

    Note: This is a heuristic implementation. In production, replace the
    phrase list with a similarity search over a reference corpus.
    """

    def word_count(self, content: str) -> int:
        return len(content.split())

    def plagiarism_score(self, content: str) -> float:
        """Score the content by suspicious phrase hits, saturating at ten."""
        lowered = content.lower()
        hits = sum(1 for phrase in SUSPICIOUS_PHRASES if phrase in lowered)
        return min(hits / 10, 1.0)

    def citation_count(self, content: str) -> int:
        return sum(len(pattern.findall(content)) for pattern in CITATION_PATTERNS)

    def citation_score(self, content: str) -> float:
        """Citations per 100 words, capped at 1."""
        words = self.word_count(content)
        if words == 0:
            return 0.0
        return min(self.citation_count(content) / (words / 100), 1.0)
