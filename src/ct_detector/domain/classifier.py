"""Crash classifier: pure function of a newest-first snapshot window.

Statistics are integer fixed-point. Squared deviations are WAD products
((p - mean)^2 // 1e18), so the variance stays in the 18-decimal price scale
and the stddev is its Newton floor root. The outlier floor is
mean - 2*stddev, saturated at 0.

Detector priority: FLASH_CRASH > GRADUAL_DECLINE > HIGH_VOLATILITY > NONE.
"""

from collections.abc import Sequence

from src.ct_collector.domain.models import Snapshot
from src.ct_common.enums import CrashKind
from src.ct_common.fixed_point import bps_of, drop_bps, isqrt_newton, saturating_sub, wad_mul
from src.ct_detector.domain.constants import (
    FLASH_CRASH_THRESHOLD_BPS,
    GRADUAL_DECLINE_THRESHOLD_BPS,
    OUTLIER_STDDEVS,
    VOLATILITY_THRESHOLD_BPS,
)
from src.ct_detector.domain.models import NO_CRASH, CrashVerdict, WindowStats
from src.ct_detector.domain.window import is_classifiable


def window_stats(prices: Sequence[int]) -> WindowStats:
    """Mean, WAD-scaled stddev and outlier floor of a price window.

    The stddev is the root of a WAD product, so for 18-decimal prices it is tiny
    and the floor sits just under the mean. Consequently [11, 9, 12, 10] (newest
    first) is a FLASH_CRASH of 2500 bps via the 12 -> 9 step, not HIGH_VOLATILITY.
    """
    n = len(prices)
    mean = sum(prices) // n
    variance = sum(wad_mul(p - mean, p - mean) for p in prices) // n
    stddev = isqrt_newton(variance)
    return WindowStats(
        mean=mean,
        stddev=stddev,
        outlier_floor=saturating_sub(mean, OUTLIER_STDDEVS * stddev),
    )


def detect_flash_crash(prices: Sequence[int], stats: WindowStats) -> CrashVerdict | None:
    """First adjacent pair, newest to oldest, with a big drop into an outlier."""
    for newer, older in zip(prices, prices[1:]):
        drop = drop_bps(newer, older)
        if drop >= FLASH_CRASH_THRESHOLD_BPS and newer < stats.outlier_floor:
            return CrashVerdict(CrashKind.FLASH_CRASH, drop)
    return None


def detect_gradual_decline(prices: Sequence[int], stats: WindowStats) -> CrashVerdict | None:
    # every step forward in time must be strictly lower
    if not all(newer < older for newer, older in zip(prices, prices[1:])):
        return None
    newest, oldest = prices[0], prices[-1]
    total = drop_bps(newest, oldest)
    if total >= GRADUAL_DECLINE_THRESHOLD_BPS and newest < stats.outlier_floor:
        return CrashVerdict(CrashKind.GRADUAL_DECLINE, total)
    return None


def mean_step_bps(prices: Sequence[int]) -> int:
    steps = [bps_of(abs(newer - older), newer) for newer, older in zip(prices, prices[1:])]
    return sum(steps) // len(steps)


def detect_high_volatility(prices: Sequence[int]) -> CrashVerdict | None:
    volatility = mean_step_bps(prices)
    if volatility >= VOLATILITY_THRESHOLD_BPS:
        return CrashVerdict(CrashKind.HIGH_VOLATILITY, volatility)
    return None


def classify(window: Sequence[Snapshot]) -> CrashVerdict:
    """Classify a window. Never raises: malformed input is NO_CRASH."""
    if not is_classifiable(window):
        return NO_CRASH
    prices = [s.price for s in window]
    stats = window_stats(prices)
    return (
        detect_flash_crash(prices, stats)
        or detect_gradual_decline(prices, stats)
        or detect_high_volatility(prices)
        or NO_CRASH
    )
