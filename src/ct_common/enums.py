"""Global enums: wire values must match DB CHECK constraints exactly."""

from enum import Enum, IntEnum


class CrashKind(IntEnum):
    """Crash classification; the int value is the uint8 carried on the wire."""
    NONE = 0
    GRADUAL_DECLINE = 1
    FLASH_CRASH = 2
    HIGH_VOLATILITY = 3
    MANIPULATION = 4  # reserved: accepted by the ledger, never produced by the classifier


class CollectionMode(str, Enum):
    NORMAL = "NORMAL"
    EMERGENCY = "EMERGENCY"


class ModeChangeTrigger(str, Enum):
    ESCALATION = "ESCALATION"
    OVERRIDE = "OVERRIDE"
