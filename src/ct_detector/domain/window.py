"""Window preconditions. A window failing any of them is not classified."""

from collections.abc import Sequence

from src.ct_collector.domain.constants import SCHEMA_VERSION
from src.ct_collector.domain.models import Snapshot
from src.ct_detector.domain.constants import MIN_WINDOW_SIZE, MIN_WINDOW_SPAN_SECONDS


def is_classifiable(window: Sequence[Snapshot]) -> bool:
    """True when window is long enough, uniform, newest-first and wide enough."""
    if len(window) < MIN_WINDOW_SIZE:
        return False
    collection_id = window[0].collection_id
    for s in window:
        if s.schema_version != SCHEMA_VERSION:
            return False
        if not s.reporter_tag:
            return False
        if s.collection_id != collection_id:
            return False
        if s.price <= 0:
            return False
    for newer, older in zip(window, window[1:]):
        if newer.observed_at <= older.observed_at:
            return False
    return window[0].observed_at - window[-1].observed_at >= MIN_WINDOW_SPAN_SECONDS
