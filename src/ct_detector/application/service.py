"""DetectorService: host-network entry point for classification.

should_respond() must always return a decision: undecodable snapshots and
unclassifiable windows both answer (False, b"").
"""

import logging
from collections.abc import Sequence

from src.ct_collector.domain.models import Snapshot
from src.ct_common.codec import TupleDecodeError
from src.ct_detector.domain.classifier import classify
from src.ct_detector.domain.payload import CrashPayload

logger = logging.getLogger(__name__)


class DetectorService:
    def should_respond(self, encoded_snapshots: Sequence[bytes]) -> tuple[bool, bytes]:
        try:
            window = [Snapshot.decode(data) for data in encoded_snapshots]
        except TupleDecodeError as e:
            logger.info("Rejecting undecodable window: %s", e)
            return False, b""

        verdict = classify(window)
        if not verdict.triggered:
            return False, b""

        payload = CrashPayload.from_verdict(window, verdict)
        logger.info(
            "Crash detected: collection=%s kind=%s severity=%d bps",
            payload.collection_id,
            verdict.kind.name,
            verdict.severity_bps,
        )
        return True, payload.encode()
