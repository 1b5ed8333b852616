"""PriceSource Protocol: the collector only depends on this.

Unit tests inject in-memory fakes; infrastructure provides the HTTP adapter.
"""

from typing import Protocol

from src.ct_feeds.domain.models import RoundData


class PriceSourceProtocol(Protocol):
    name: str

    async def latest_round_data(self) -> RoundData: ...
