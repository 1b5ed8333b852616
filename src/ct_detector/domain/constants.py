"""Classifier thresholds: fixed at build time, not runtime-configurable."""

FLASH_CRASH_THRESHOLD_BPS: int = 2000       # 20% single-step drop
GRADUAL_DECLINE_THRESHOLD_BPS: int = 3000   # 30% drop across the window
VOLATILITY_THRESHOLD_BPS: int = 1500        # 15% mean absolute step
MIN_WINDOW_SIZE: int = 3
MIN_WINDOW_SPAN_SECONDS: int = 60
OUTLIER_STDDEVS: int = 2
