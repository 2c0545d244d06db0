"""System prompts and task builders for AI-assisted domains."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ura_validator.validation.domains import ValidationDomain

KYC_SYSTEM_PROMPT = """\
You are an expert KYC (Know Your Customer) compliance analyst for DeFi protocols.
Your role is to assess wallet addresses and transaction patterns for compliance \
with financial regulations.

You must analyze:
1. OFAC sanctions list compliance
2. Risk assessment based on transaction patterns
3. Geographic restrictions
4. AML (Anti-Money Laundering) indicators

Respond in JSON format with:
{
  "isValid": boolean,
  "confidence": number (0-1),
  "reasoning": "detailed explanation",
  "details": {
    "riskScore": number (0-1),
    "ofacStatus": "clear|flagged|unknown",
    "amlFlags": ["flag1", "flag2"],
    "geographicRisk": "low|medium|high"
  },
  "flags": ["any warnings or concerns"]
}"""

SOCIAL_SYSTEM_PROMPT = """\
You are an expert content moderation analyst for Web3 social platforms.
Your role is to analyze user-generated content for toxicity, spam, harassment, \
and policy violations.

You must analyze:
1. Toxicity and harmful language
2. Spam and promotional content
3. Harassment and bullying
4. Misinformation and false claims
5. Community guidelines compliance

Respond in JSON format with:
{
  "isValid": boolean,
  "confidence": number (0-1),
  "reasoning": "detailed explanation",
  "details": {
    "toxicityScore": number (0-1),
    "spamScore": number (0-1),
    "harassmentScore": number (0-1),
    "contentCategory": "safe|warning|violation",
    "recommendedActions": ["action1", "action2"]
  },
  "flags": ["specific violations or concerns"]
}"""


def _dump(value: Any, fallback: str) -> str:
    if value is None:
        return json.dumps(fallback)
    return json.dumps(value, default=str)


def kyc_task(payload: Mapping[str, Any]) -> str:
    return (
        "Analyze this wallet address for KYC compliance:\n\n"
        f"Wallet Address: {payload.get('walletAddress')}\n"
        f"Transaction History: {_dump(payload.get('transactionHistory'), 'Not provided')}\n"
        f"User Information: {_dump(payload.get('userInfo'), 'Not provided')}\n\n"
        "Please assess:\n"
        "1. Is this address on any sanctions lists?\n"
        "2. What is the risk level based on transaction patterns?\n"
        "3. Are there any AML red flags?\n"
        "4. What is the overall compliance status?\n\n"
        "Provide a thorough analysis with specific reasoning for your decision."
    )


def social_task(payload: Mapping[str, Any]) -> str:
    return (
        "Analyze this social media content for moderation:\n\n"
        f"Content: \"{payload.get('content')}\"\n"
        f"Author: {payload.get('author') or 'Anonymous'}\n"
        f"Platform: {payload.get('platform') or 'Unknown'}\n"
        f"Content Type: {payload.get('contentType') or 'post'}\n"
        f"Metadata: {_dump(payload.get('metadata') or {}, '{}')}\n\n"
        "Please assess:\n"
        "1. Does the content contain toxic, harmful, or offensive language?\n"
        "2. Is this spam or unwanted promotional content?\n"
        "3. Does it contain harassment, bullying, or threats?\n"
        "4. Are there any policy violations or inappropriate content?\n"
        "5. What moderation action would you recommend?\n\n"
        "Be thorough but fair in your analysis, considering context and intent."
    )


def with_context(task: str, context: Mapping[str, Any] | None) -> str:
    """Prefix the task with ``key: json`` context lines when context is given."""
    if not context:
        return task
    lines = "\n".join(f"{key}: {json.dumps(value, default=str)}" for key, value in context.items())
    return f"Context:\n{lines}\n\nTask:\n{task}"


DOMAIN_PROMPTS = {
    ValidationDomain.DEFI_KYC: (KYC_SYSTEM_PROMPT, kyc_task),
    ValidationDomain.WEB3_SOCIAL: (SOCIAL_SYSTEM_PROMPT, social_task),
}


__all__ = [
    "DOMAIN_PROMPTS",
    "KYC_SYSTEM_PROMPT",
    "SOCIAL_SYSTEM_PROMPT",
    "kyc_task",
    "social_task",
    "with_context",
]
