"""Domain models for ct_detector: pure dataclasses, no I/O."""

from dataclasses import dataclass

from src.ct_common.enums import CrashKind


@dataclass(frozen=True)
class CrashVerdict:
    kind: CrashKind
    severity_bps: int

    @property
    def triggered(self) -> bool:
        return self.kind is not CrashKind.NONE


NO_CRASH = CrashVerdict(CrashKind.NONE, 0)


@dataclass(frozen=True)
class WindowStats:
    mean: int
    stddev: int
    outlier_floor: int   # mean - k*stddev, saturated at 0
