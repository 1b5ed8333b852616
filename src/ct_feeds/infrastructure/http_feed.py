"""HttpPriceFeed: reads a latestRoundData-style JSON document over HTTP.

Expected body (integers may also arrive as decimal strings, since uint256
values overflow JavaScript numbers):
    {"roundId": 7, "answer": "6000000000000000000", "startedAt": 1700000000,
     "updatedAt": 1700000000, "answeredInRound": 7}
"""

import logging
from typing import Any

import httpx

from src.ct_common.errors import PriceFeedUnavailableError
from src.ct_feeds.domain.models import RoundData

logger = logging.getLogger(__name__)

_FIELDS = ("roundId", "answer", "startedAt", "updatedAt", "answeredInRound")


def parse_round_data(payload: Any) -> RoundData:
    """Map the JSON body to RoundData; raise ValueError on a malformed body."""
    if not isinstance(payload, dict):
        raise ValueError(f"expected object, got {type(payload).__name__}")
    missing = [f for f in _FIELDS if f not in payload]
    if missing:
        raise ValueError(f"missing fields: {', '.join(missing)}")
    values = {}
    for f in _FIELDS:
        raw = payload[f]
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise ValueError(f"{f} must be an integer, got {raw!r}")
        values[f] = int(raw)
    return RoundData(
        round_id=values["roundId"],
        answer=values["answer"],
        started_at=values["startedAt"],
        updated_at=values["updatedAt"],
        answered_in_round=values["answeredInRound"],
    )


class HttpPriceFeed:
    def __init__(self, name: str, url: str, timeout: float = 5.0) -> None:
        self.name = name
        self._url = url
        self._timeout = timeout

    async def _request_json(self) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(self._url)
            response.raise_for_status()
            return response.json()

    async def latest_round_data(self) -> RoundData:
        try:
            payload = await self._request_json()
            return parse_round_data(payload)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Price feed %s read failed: %s", self.name, e)
            raise PriceFeedUnavailableError(self.name, str(e)) from e
