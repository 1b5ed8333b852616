"""Unit tests for emergency-mode escalation rules."""

import pytest

from src.ct_common.enums import CrashKind
from src.ct_response.domain.escalation import should_escalate

ETH = 10**18


class TestGradualDecline:
    def test_half_price_escalates(self) -> None:
        assert should_escalate(CrashKind.GRADUAL_DECLINE, 5 * ETH, 10 * ETH, 0)

    def test_just_under_half_does_not(self) -> None:
        assert not should_escalate(CrashKind.GRADUAL_DECLINE, 5 * ETH + 1, 10 * ETH, 9999)

    def test_reported_severity_is_ignored(self) -> None:
        assert not should_escalate(CrashKind.GRADUAL_DECLINE, 8 * ETH, 10 * ETH, 9000)

    def test_price_above_baseline_never_escalates(self) -> None:
        assert not should_escalate(CrashKind.GRADUAL_DECLINE, 12 * ETH, 10 * ETH, 9000)


class TestSeverityRules:
    @pytest.mark.parametrize(
        ("kind", "threshold"),
        [(CrashKind.FLASH_CRASH, 4000), (CrashKind.HIGH_VOLATILITY, 3000)],
    )
    def test_threshold_is_inclusive(self, kind: CrashKind, threshold: int) -> None:
        assert should_escalate(kind, ETH, ETH, threshold)
        assert not should_escalate(kind, ETH, ETH, threshold - 1)

    def test_manipulation_always_escalates(self) -> None:
        assert should_escalate(CrashKind.MANIPULATION, ETH, ETH, 0)

    def test_none_never_escalates(self) -> None:
        assert not should_escalate(CrashKind.NONE, 1, 10 * ETH, 10000)
