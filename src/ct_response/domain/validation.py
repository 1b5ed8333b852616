"""Input checks for ledger operations. Raise InvalidInputError, mutate nothing."""

from dataclasses import replace

from src.ct_common.address import ZERO_ADDRESS, is_address
from src.ct_common.enums import CrashKind
from src.ct_common.errors import InvalidInputError
from src.ct_response.domain.constants import MAX_REPORTER_TAG_LENGTH, MAX_UINT256
from src.ct_response.domain.models import CrashResponse

_RESPONSE_KINDS = frozenset(k for k in CrashKind if k is not CrashKind.NONE)


def check_collection_id(collection_id: str) -> str:
    """Return the lowercase id; null (zero address) and malformed ids are rejected."""
    if not is_address(collection_id):
        raise InvalidInputError(f"collection_id is not an address: {collection_id!r}")
    collection_id = collection_id.lower()
    if collection_id == ZERO_ADDRESS:
        raise InvalidInputError("collection_id is null")
    return collection_id


def check_identity(identity: str) -> str:
    if not is_address(identity) or identity.lower() == ZERO_ADDRESS:
        raise InvalidInputError(f"identity is not a usable address: {identity!r}")
    return identity.lower()


def _check_uint(name: str, value: int) -> None:
    if not (0 <= value <= MAX_UINT256):
        raise InvalidInputError(f"{name} out of uint256 range: {value}")


def check_crash_response(r: CrashResponse) -> CrashResponse:
    """Validate and normalize the respond() arguments."""
    if not r.reporter_tag:
        raise InvalidInputError("reporter_tag is empty")
    if len(r.reporter_tag) > MAX_REPORTER_TAG_LENGTH:
        raise InvalidInputError(f"reporter_tag longer than {MAX_REPORTER_TAG_LENGTH} chars")
    collection_id = check_collection_id(r.collection_id)
    if r.crash_kind not in _RESPONSE_KINDS:
        raise InvalidInputError(f"crash_kind must be one of 1-4, got {r.crash_kind}")
    if r.current_price <= 0:
        raise InvalidInputError(f"current_price must be > 0, got {r.current_price}")
    if r.baseline_price <= 0:
        raise InvalidInputError(f"baseline_price must be > 0, got {r.baseline_price}")
    _check_uint("current_price", r.current_price)
    _check_uint("baseline_price", r.baseline_price)
    _check_uint("detected_at", r.detected_at)
    _check_uint("severity_bps", r.severity_bps)
    return replace(r, collection_id=collection_id)
