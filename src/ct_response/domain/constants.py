"""Ledger constants: fixed at build time, not runtime-configurable."""

GRADUAL_DECLINE_ESCALATION_BPS: int = 5000   # 50% below baseline
FLASH_CRASH_ESCALATION_BPS: int = 4000
HIGH_VOLATILITY_ESCALATION_BPS: int = 3000
RECENT_HISTORY_CAP: int = 20
HEALTH_SILENCE_WINDOW_SECONDS: int = 1200
MAX_REPORTER_TAG_LENGTH: int = 64
MAX_UINT256: int = 2**256 - 1
