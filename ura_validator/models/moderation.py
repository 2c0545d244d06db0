"""Keyword and structure heuristics for social content moderation."""

import re
from typing import Any

TOXIC_KEYWORDS: tuple[str, ...] = (
    "hate",
    "toxic",
    "abuse",
    "harassment",
    "threat",
    "violence",
    "discrimination",
    "offensive",
    "inappropriate",
)

_LINK_PATTERN = re.compile(r"https?://\S+")
_EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF\U0001F1E0-\U0001F1FF]"
)
_UPPERCASE_PATTERN = re.compile(r"[A-Z]")


class ContentModerator:
    """Toxicity and spam scoring for user-generated posts.

    Note: This is a heuristic implementation. In production, replace with a
    moderation model or a hosted toxicity classifier.
    """

    def toxicity_score(self, content: str) -> float:
        if not content:
            return 0.0
        lowered = content.lower()
        hits = sum(1 for keyword in TOXIC_KEYWORDS if keyword in lowered)
        caps_ratio = len(_UPPERCASE_PATTERN.findall(content)) / len(content)
        if caps_ratio > 0.5:
            hits += 1
        return min(hits / 5, 1.0)

    def spam_signals(self, content: str) -> dict[str, Any]:
        words = content.split()
        repetition = 1 - len(set(words)) / len(words) if words else 0.0
        return {
            "repetitionRatio": round(repetition, 4),
            "linkCount": len(_LINK_PATTERN.findall(content)),
            "emojiCount": len(_EMOJI_PATTERN.findall(content)),
        }

    def spam_score(self, content: str) -> float:
        """Blend repetition, link volume, and emoji density into [0, 1]."""
        signals = self.spam_signals(content)
        score = signals["repetitionRatio"] * 0.5
        if signals["linkCount"] > 3:
            score += 0.3
        if signals["emojiCount"] > len(content) * 0.1:
            score += 0.2
        return min(score, 1.0)
