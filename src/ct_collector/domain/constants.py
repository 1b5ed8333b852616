"""Collection constants: fixed at build time, not runtime-configurable."""

SCHEMA_VERSION: int = 1
MAX_ORACLE_DIVERGENCE_BPS: int = 100   # 1%
STALENESS_WINDOW_SECONDS: int = 3600
MAX_REPORTER_TAG_LENGTH: int = 64
