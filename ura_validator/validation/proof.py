"""Content-addressed proof hashes binding a payload to its verdict."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any

from ura_validator.validation.errors import MalformedPayloadError
from ura_validator.validation.models import ProofRecord, Verdict, epoch_millis

_HASH_PREFIX = "0x"


def canonical_json(payload: Any) -> str:
    """Serialize with sorted keys and no insignificant whitespace.

    Raises ``MalformedPayloadError`` for values JSON cannot represent,
    including NaN and infinity.
    """
    try:
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(
            f"Payload is not JSON-serializable: {exc}",
            details={"reason": str(exc)},
        ) from exc


def _digest(text: str) -> str:
    return _HASH_PREFIX + hashlib.sha256(text.encode("utf-8")).hexdigest()


def data_hash(payload: Any) -> str:
    return _digest(canonical_json(payload))


def proof_hash(data_hash_value: str, is_valid: bool, rule_set_id: str, timestamp: int) -> str:
    verdict_token = "true" if is_valid else "false"
    return _digest(f"{data_hash_value}{verdict_token}{rule_set_id}{timestamp}")


def build_proof(payload: Any, verdict: Verdict, rule_set_id: str) -> ProofRecord:
    timestamp = verdict.timestamp if verdict.timestamp is not None else epoch_millis()
    payload_hash = data_hash(payload)
    return ProofRecord(
        data_hash=payload_hash,
        proof_hash=proof_hash(payload_hash, verdict.is_valid, rule_set_id, timestamp),
        rule_set_id=rule_set_id,
        timestamp=timestamp,
    )


def verify_proof(payload: Any, proof: ProofRecord, *, is_valid: bool) -> bool:
    """Recompute both hashes and compare them in constant time."""
    expected_data_hash = data_hash(payload)
    if not hmac.compare_digest(expected_data_hash, proof.data_hash):
        return False
    expected_proof_hash = proof_hash(expected_data_hash, is_valid, proof.rule_set_id, proof.timestamp)
    return hmac.compare_digest(expected_proof_hash, proof.proof_hash)


__all__ = ["build_proof", "canonical_json", "data_hash", "proof_hash", "verify_proof"]
