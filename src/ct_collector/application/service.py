"""CollectorService: one validated Snapshot per invocation.

Reads both price sources, validates, averages. Any failure aborts the call with
no snapshot; retrying is the host network's business on its next round.
"""

import logging
from collections.abc import Callable

from config.settings import Settings
from src.ct_collector.domain.constants import MAX_REPORTER_TAG_LENGTH, SCHEMA_VERSION
from src.ct_collector.domain.models import Snapshot
from src.ct_collector.domain.validation import (
    check_agreement,
    check_fresh,
    check_price_positive,
)
from src.ct_common.address import ZERO_ADDRESS, normalize_address
from src.ct_common.datetime_utils import unix_now
from src.ct_feeds.domain.source import PriceSourceProtocol
from src.ct_feeds.infrastructure.http_feed import HttpPriceFeed

logger = logging.getLogger(__name__)


class CollectorService:
    def __init__(
        self,
        primary: PriceSourceProtocol,
        secondary: PriceSourceProtocol,
        collection_id: str,
        reporter_tag: str,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        collection_id = normalize_address(collection_id)
        if collection_id == ZERO_ADDRESS:
            raise ValueError("collection_id must not be the zero address")
        if not (1 <= len(reporter_tag) <= MAX_REPORTER_TAG_LENGTH):
            raise ValueError(
                f"reporter_tag must be 1-{MAX_REPORTER_TAG_LENGTH} chars, got {reporter_tag!r}"
            )
        self._primary = primary
        self._secondary = secondary
        self._collection_id = collection_id
        self._reporter_tag = reporter_tag
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "CollectorService":
        return cls(
            primary=HttpPriceFeed("primary", settings.PRIMARY_FEED_URL, settings.FEED_TIMEOUT_SECONDS),
            secondary=HttpPriceFeed(
                "secondary", settings.SECONDARY_FEED_URL, settings.FEED_TIMEOUT_SECONDS
            ),
            collection_id=settings.COLLECTION_ID,
            reporter_tag=settings.REPORTER_TAG,
        )

    async def collect(self) -> Snapshot:
        first = await self._primary.latest_round_data()
        second = await self._secondary.latest_round_data()
        now = self._clock()

        check_price_positive(self._primary.name, first.answer)
        check_price_positive(self._secondary.name, second.answer)
        check_fresh(self._primary.name, first.updated_at, now)
        check_fresh(self._secondary.name, second.updated_at, now)
        check_agreement(first.answer, second.answer)

        snapshot = Snapshot(
            schema_version=SCHEMA_VERSION,
            price=(first.answer + second.answer) // 2,
            observed_at=now,
            collection_id=self._collection_id,
            reporter_tag=self._reporter_tag,
        )
        logger.debug(
            "Collected snapshot: collection=%s price=%d at=%d",
            snapshot.collection_id,
            snapshot.price,
            snapshot.observed_at,
        )
        return snapshot

    async def collect_encoded(self) -> bytes:
        return (await self.collect()).encode()
