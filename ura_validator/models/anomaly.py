"""Statistical anomaly and peer-consensus scoring for sensor telemetry."""

import hashlib
from collections.abc import Sequence
from typing import Protocol

import numpy as np

Z_SCORE_LIMIT = 2.0


class PeerReadingSource(Protocol):
    """Supplies readings reported by sensors near the one under validation."""

    def peer_readings(self, sensor_id: str, readings: Sequence[float]) -> list[float]:
        ...


class SimulatedPeerReadings:
    """Deterministic stand-in for a neighbourhood query.

    Peers sit around the sensor's first reading with bounded noise, seeded by
    the sensor id so repeated validations of the same payload agree.
    """

    def __init__(self, peer_count: int = 3, noise: float = 1.0) -> None:
        self.peer_count = peer_count
        self.noise = noise

    def peer_readings(self, sensor_id: str, readings: Sequence[float]) -> list[float]:
        if not readings:
            return []
        seed = int(hashlib.sha256(sensor_id.encode("utf-8")).hexdigest()[:16], 16)
        rng = np.random.default_rng(seed)
        offsets = (rng.random(self.peer_count) - 0.5) * 2 * self.noise
        return [float(readings[0] + offset) for offset in offsets]


class SensorAnomalyDetector:
    """Z-score anomaly detection over a reading window."""

    def __init__(self, z_limit: float = Z_SCORE_LIMIT) -> None:
        self.z_limit = z_limit

    def anomaly_ratio(self, readings: Sequence[float]) -> float:
        """Fraction of readings whose population z-score exceeds the limit.

        Args:
            readings: Numeric sensor readings in arrival order

        Returns:
            Ratio in [0, 1]; 0 when fewer than two readings or zero spread
        """
        data = np.asarray(readings, dtype=float)
        if data.size < 2:
            return 0.0
        std = float(np.std(data))
        if std == 0:
            return 0.0
        z_scores = np.abs((data - np.mean(data)) / std)
        return float(np.count_nonzero(z_scores > self.z_limit) / data.size)

    def consensus_score(self, latest: float, peers: Sequence[float], tolerance: float) -> float:
        """Fraction of peers within ``tolerance`` of the latest reading."""
        if not peers:
            return 0.0
        differences = np.abs(np.asarray(peers, dtype=float) - latest)
        return float(np.count_nonzero(differences < tolerance) / len(peers))
