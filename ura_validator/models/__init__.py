"""Heuristic scoring models."""

from ura_validator.models.anomaly import PeerReadingSource, SensorAnomalyDetector, SimulatedPeerReadings
from ura_validator.models.moderation import ContentModerator
from ura_validator.models.plagiarism import PlagiarismDetector
from ura_validator.models.risk import WalletRiskScorer

__all__ = [
    "ContentModerator",
    "PeerReadingSource",
    "PlagiarismDetector",
    "SensorAnomalyDetector",
    "SimulatedPeerReadings",
    "WalletRiskScorer",
]
