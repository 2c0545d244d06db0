"""Wallet screening and pseudo-risk scoring."""

import hashlib
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")
_ETHEREUM_ADDRESS = re.compile(r"^0x[a-fA-F0-9]{40}$")
_BITCOIN_ADDRESS = re.compile(r"^[13][a-km-zA-HJ-NP-Z1-9]{25,34}$")


def _hex_tail(address: str, width: int) -> int:
    """Integer value of the last ``width`` characters, hashing non-hex identifiers."""
    tail = address[-width:]
    if len(tail) == width and _HEX_DIGITS.match(tail):
        return int(tail, 16)
    digest = hashlib.sha256(address.encode("utf-8")).hexdigest()
    return int(digest[-width:], 16)


class WalletRiskScorer:
    """Deterministic KYC screening for wallet identifiers.

    Note: This is a heuristic implementation. Scores are derived from the
    identifier itself so repeated screenings of the same wallet agree; no
    external sanctions or chain-analytics data is consulted.
    """

    def __init__(self, sanctioned_addresses: Iterable[str] = ()) -> None:
        self.sanctioned = {address.strip().lower() for address in sanctioned_addresses if address.strip()}

    def is_sanctioned(self, address: str) -> bool:
        return address.strip().lower() in self.sanctioned

    def risk_score(self, address: str) -> float:
        """Map the identifier to a stable score in [0, 0.99]."""
        return (_hex_tail(address, 4) % 100) / 100

    def classify_address(self, address: str) -> dict[str, Any]:
        """Classify the address format.

        Args:
            address: Raw wallet identifier

        Returns:
            ``isValid`` flag and a ``format`` of ethereum, bitcoin, or unknown
        """
        if not address:
            return {"isValid": False, "format": "missing"}
        if _ETHEREUM_ADDRESS.match(address):
            return {"isValid": True, "format": "ethereum"}
        if _BITCOIN_ADDRESS.match(address):
            return {"isValid": True, "format": "bitcoin"}
        return {"isValid": False, "format": "unknown"}

    def estimate_account_age(self, address: str) -> int:
        """Rough account age in days derived from the identifier."""
        return _hex_tail(address, 8) // 1_000_000

    def diversity_score(self, transactions: Sequence[Any]) -> float:
        """Unique counterparties divided by transaction count."""
        if not transactions:
            return 0.0
        counterparties: set[str] = set()
        for transaction in transactions:
            if isinstance(transaction, Mapping):
                counterparty = transaction.get("to") or transaction.get("from")
            else:
                counterparty = transaction
            counterparties.add(str(counterparty))
        return round(len(counterparties) / len(transactions), 4)

    def additional_risk_factors(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        address = str(payload.get("walletAddress", ""))
        history = payload.get("transactionHistory") or []
        if not isinstance(history, Sequence) or isinstance(history, (str, bytes)):
            history = []
        return {
            "accountAge": self.estimate_account_age(address),
            "transactionVolume": len(history),
            "diversityScore": self.diversity_score(history),
        }
