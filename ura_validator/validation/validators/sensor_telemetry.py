"""DePIN sensor telemetry screening: z-score anomalies and peer consensus."""

from __future__ import annotations

import math
from typing import Any

from ura_validator.models.anomaly import PeerReadingSource, SensorAnomalyDetector, SimulatedPeerReadings
from ura_validator.validation.domains import ValidationDomain
from ura_validator.validation.models import RuleSetParameters, Verdict
from ura_validator.validation.validators.base import DomainValidator, ValidationContext, check_status

CONFIDENCE = 0.8


def _numeric_series(value: Any) -> list[float] | None:
    if not isinstance(value, list):
        return None
    series: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)) or not math.isfinite(item):
            return None
        series.append(float(item))
    return series


class SensorTelemetryValidator(DomainValidator):
    domain = ValidationDomain.DEPIN_SENSOR

    def __init__(
        self,
        *,
        detector: SensorAnomalyDetector | None = None,
        peer_source: PeerReadingSource | None = None,
    ) -> None:
        self._detector = detector or SensorAnomalyDetector()
        self._peer_source = peer_source or SimulatedPeerReadings()

    async def validate(
        self,
        payload: Any,
        parameters: RuleSetParameters,
        context: ValidationContext,
    ) -> Verdict:
        data = self.as_mapping(payload)
        if data is None:
            return self.reject("Payload must be an object")
        sensor_id = data.get("sensorId")
        raw_readings = data.get("readings")
        if raw_readings is None and "reading" in data:
            raw_readings = [data["reading"]]
        if not isinstance(sensor_id, str) or not sensor_id.strip() or not raw_readings:
            return self.reject("Missing sensor ID or readings")
        readings = _numeric_series(raw_readings)
        if readings is None:
            return self.reject("Readings must be finite numbers")

        peers = _numeric_series(data.get("peerReadings"))
        peer_source = "payload"
        if not peers:
            peers = self._peer_source.peer_readings(sensor_id, readings)
            peer_source = "simulated"

        anomaly_threshold = parameters.number("anomalyThreshold", 0.9)
        consensus_threshold = parameters.number("consensusThreshold", 0.6)
        tolerance = parameters.number("consensusTolerance", 5.0)
        require_consensus = parameters.flag("requireConsensus", True)

        anomaly_score = self._detector.anomaly_ratio(readings)
        consensus_score = self._detector.consensus_score(readings[-1], peers, tolerance)
        anomaly_passed = anomaly_score < anomaly_threshold
        consensus_passed = consensus_score > consensus_threshold

        if require_consensus:
            consensus_check = check_status(consensus_passed)
        else:
            consensus_check = "skipped"

        return self.create_result(
            anomaly_passed and (consensus_passed or not require_consensus),
            CONFIDENCE,
            {
                "anomalyScore": anomaly_score,
                "consensusScore": consensus_score,
                "threshold": anomaly_threshold,
                "consensusThreshold": consensus_threshold,
                "readingCount": len(readings),
                "peerCount": len(peers),
                "peerSource": peer_source,
                "sensorId": sensor_id,
                "timeWindowMinutes": parameters.number("timeWindowMinutes", 60),
                "checks": {
                    "anomalyDetection": check_status(anomaly_passed),
                    "consensusValidation": consensus_check,
                },
            },
        )


__all__ = ["SensorTelemetryValidator"]
