"""Escalation rules: does an accepted crash response force emergency mode?"""

from src.ct_common.enums import CrashKind
from src.ct_common.fixed_point import drop_bps
from src.ct_response.domain.constants import (
    FLASH_CRASH_ESCALATION_BPS,
    GRADUAL_DECLINE_ESCALATION_BPS,
    HIGH_VOLATILITY_ESCALATION_BPS,
)


def should_escalate(
    kind: CrashKind, current_price: int, baseline_price: int, severity_bps: int
) -> bool:
    if kind is CrashKind.GRADUAL_DECLINE:
        # Measured from prices, not the reported severity; 0 if price did not fall
        return drop_bps(current_price, baseline_price) >= GRADUAL_DECLINE_ESCALATION_BPS
    if kind is CrashKind.FLASH_CRASH:
        return severity_bps >= FLASH_CRASH_ESCALATION_BPS
    if kind is CrashKind.HIGH_VOLATILITY:
        return severity_bps >= HIGH_VOLATILITY_ESCALATION_BPS
    return kind is CrashKind.MANIPULATION
