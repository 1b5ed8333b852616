"""Unit tests for respond() argument validation."""

from dataclasses import replace

import pytest

from src.ct_common.errors import DeploymentConfigError, InvalidInputError
from src.ct_detector.domain.payload import PAYLOAD_FIELDS
from src.ct_response.domain.compatibility import check_payload_compatibility
from src.ct_response.domain.models import RESPONSE_FIELDS, CrashResponse
from src.ct_response.domain.validation import (
    check_collection_id,
    check_crash_response,
    check_identity,
)
from tests.unit.factories import COLLECTION, ETH, T0

VALID = CrashResponse(
    reporter_tag="floor-crash-trap",
    collection_id=COLLECTION.upper().replace("0X", "0x"),
    current_price=6 * ETH,
    baseline_price=10 * ETH,
    crash_kind=2,
    detected_at=T0,
    severity_bps=4000,
)


class TestCheckCrashResponse:
    def test_valid_response_normalizes_collection(self) -> None:
        assert check_crash_response(VALID).collection_id == COLLECTION

    @pytest.mark.parametrize(
        "changes",
        [
            {"reporter_tag": ""},
            {"reporter_tag": "x" * 65},
            {"collection_id": "0x" + "0" * 40},
            {"collection_id": "bored-apes"},
            {"crash_kind": 0},
            {"crash_kind": 5},
            {"current_price": 0},
            {"baseline_price": 0},
            {"current_price": 2**256},
            {"detected_at": -1},
            {"severity_bps": -5},
        ],
    )
    def test_invalid_fields(self, changes: dict) -> None:
        with pytest.raises(InvalidInputError):
            check_crash_response(replace(VALID, **changes))

    def test_tag_of_sixty_four_chars_allowed(self) -> None:
        check_crash_response(replace(VALID, reporter_tag="x" * 64))

    def test_manipulation_kind_allowed(self) -> None:
        check_crash_response(replace(VALID, crash_kind=4))


class TestAddressChecks:
    def test_collection_lowercased(self) -> None:
        assert check_collection_id("0x" + "AB" * 20) == "0x" + "ab" * 20

    def test_identity_zero_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            check_identity("0x" + "0" * 40)


class TestPayloadCompatibility:
    def test_detector_payload_matches_respond(self) -> None:
        check_payload_compatibility(PAYLOAD_FIELDS, RESPONSE_FIELDS)

    def test_reordered_fields_rejected(self) -> None:
        swapped = list(PAYLOAD_FIELDS)
        swapped[2], swapped[3] = swapped[3], swapped[2]
        with pytest.raises(DeploymentConfigError, match="field 2"):
            check_payload_compatibility(swapped, RESPONSE_FIELDS)

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(DeploymentConfigError):
            check_payload_compatibility(PAYLOAD_FIELDS[:-1], RESPONSE_FIELDS)

    def test_type_mismatch_rejected(self) -> None:
        changed = list(PAYLOAD_FIELDS)
        changed[4] = ("crash_kind", str)
        with pytest.raises(DeploymentConfigError):
            check_payload_compatibility(changed, RESPONSE_FIELDS)
