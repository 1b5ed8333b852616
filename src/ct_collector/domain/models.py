"""Domain models for ct_collector: pure dataclasses, no I/O."""

from dataclasses import dataclass

from src.ct_common.codec import decode_tuple, encode_tuple

# Wire order: [schemaVersion, price, observedAt, collectionId, reporterTag]
SNAPSHOT_FIELDS: tuple[type, ...] = (int, int, int, str, str)


@dataclass(frozen=True)
class Snapshot:
    schema_version: int
    price: int            # smallest price unit, > 0
    observed_at: int      # unix seconds, > 0
    collection_id: str    # lowercase 0x address
    reporter_tag: str

    def to_tuple(self) -> tuple[int, int, int, str, str]:
        return (
            self.schema_version,
            self.price,
            self.observed_at,
            self.collection_id,
            self.reporter_tag,
        )

    def encode(self) -> bytes:
        return encode_tuple(self.to_tuple())

    @classmethod
    def decode(cls, data: bytes) -> "Snapshot":
        """Decode the wire tuple. Field values are not range-checked here."""
        schema_version, price, observed_at, collection_id, reporter_tag = decode_tuple(
            data, SNAPSHOT_FIELDS
        )
        return cls(
            schema_version=schema_version,  # type: ignore[arg-type]
            price=price,  # type: ignore[arg-type]
            observed_at=observed_at,  # type: ignore[arg-type]
            collection_id=str(collection_id).lower(),
            reporter_tag=reporter_tag,  # type: ignore[arg-type]
        )
