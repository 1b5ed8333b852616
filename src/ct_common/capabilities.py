"""Capability Protocols the host-network-facing routers depend on.

Routers and the host network only see these two narrow interfaces, never the
concrete collector or detector.
"""

from collections.abc import Sequence
from typing import Protocol


class Collector(Protocol):
    async def collect_encoded(self) -> bytes: ...


class ResponseDecider(Protocol):
    def should_respond(self, encoded_snapshots: Sequence[bytes]) -> tuple[bool, bytes]: ...
