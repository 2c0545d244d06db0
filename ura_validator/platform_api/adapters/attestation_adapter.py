"""Attestation adapter contract, in-memory baseline, and HTTP implementation."""

from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass
from typing import Any, Protocol
from uuid import uuid4

import httpx

from ura_validator.validation.models import utc_now


class AttestationError(Exception):
    """Raised when the attestation collaborator cannot record a proof."""

    def __init__(self, message: str, *, code: str = "ATTESTATION_FAILED", status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class AttestationAdapter(Protocol):
    """Records a proof with an external attestation service."""

    async def submit(
        self,
        *,
        data_hash: str,
        proof_hash: str,
        rule_set_id: str,
        is_valid: bool,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        ...


@dataclass(frozen=True)
class AttestationRecord:
    transaction_id: str
    data_hash: str
    proof_hash: str
    rule_set_id: str
    is_valid: bool
    metadata: dict[str, Any]
    submitted_at: str


class InMemoryAttestationAdapter:
    """Deterministic local ledger: the same proof always maps to the same transaction id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, AttestationRecord] = {}

    async def submit(
        self,
        *,
        data_hash: str,
        proof_hash: str,
        rule_set_id: str,
        is_valid: bool,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        seed = f"{data_hash}:{proof_hash}:{rule_set_id}:{'true' if is_valid else 'false'}"
        transaction_id = "0x" + hashlib.sha256(seed.encode("utf-8")).hexdigest()
        with self._lock:
            self._records.setdefault(
                transaction_id,
                AttestationRecord(
                    transaction_id=transaction_id,
                    data_hash=data_hash,
                    proof_hash=proof_hash,
                    rule_set_id=rule_set_id,
                    is_valid=is_valid,
                    metadata=dict(metadata or {}),
                    submitted_at=utc_now(),
                ),
            )
        return transaction_id

    def get(self, transaction_id: str) -> AttestationRecord | None:
        with self._lock:
            return self._records.get(transaction_id)


class HttpAttestationAdapter:
    """Attestation adapter that posts proofs to a remote attestation service."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str = "",
        timeout_seconds: float = 8.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    async def submit(
        self,
        *,
        data_hash: str,
        proof_hash: str,
        rule_set_id: str,
        is_valid: bool,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        payload = {
            "dataHash": data_hash,
            "proofHash": proof_hash,
            "ruleSetId": rule_set_id,
            "isValid": is_valid,
            "metadata": metadata or {},
        }
        headers = {"X-Request-Id": f"req-attest-{uuid4()}"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            try:
                response = await client.post(
                    f"{self._base_url}/attestations",
                    headers=headers,
                    json=payload,
                )
            except httpx.HTTPError as exc:
                raise AttestationError(str(exc), code="ATTESTATION_UNAVAILABLE") from exc

        if response.status_code >= 400:
            raise AttestationError(
                response.text or "Attestation request failed.",
                code="ATTESTATION_REQUEST_FAILED",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise AttestationError("Attestation response is not valid JSON.", code="ATTESTATION_BAD_RESPONSE") from exc
        transaction_id = body.get("transactionId") if isinstance(body, dict) else None
        if not isinstance(transaction_id, str) or transaction_id.strip() == "":
            raise AttestationError("Attestation response is missing transactionId.", code="ATTESTATION_BAD_RESPONSE")
        return transaction_id


__all__ = [
    "AttestationAdapter",
    "AttestationError",
    "AttestationRecord",
    "HttpAttestationAdapter",
    "InMemoryAttestationAdapter",
]
