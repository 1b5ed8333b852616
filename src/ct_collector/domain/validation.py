"""Price-source reading checks. Each raises on the first violation."""

from src.ct_collector.domain.constants import (
    MAX_ORACLE_DIVERGENCE_BPS,
    STALENESS_WINDOW_SECONDS,
)
from src.ct_common.errors import (
    InvalidPriceError,
    OracleDisagreementError,
    StaleDataError,
)
from src.ct_common.fixed_point import bps_of


def check_price_positive(source: str, price: int) -> None:
    if price <= 0:
        raise InvalidPriceError(source, price)


def check_fresh(source: str, updated_at: int, now: int) -> None:
    """updated_at == 0 means the feed never reported."""
    if updated_at == 0 or now - updated_at > STALENESS_WINDOW_SECONDS:
        raise StaleDataError(source, updated_at, now)


def divergence_bps(a: int, b: int) -> int:
    """|higher - lower| * 10000 // higher. Symmetric in its arguments."""
    higher, lower = (a, b) if a >= b else (b, a)
    return bps_of(higher - lower, higher)


def check_agreement(a: int, b: int) -> None:
    divergence = divergence_bps(a, b)
    if divergence > MAX_ORACLE_DIVERGENCE_BPS:
        raise OracleDisagreementError(divergence, MAX_ORACLE_DIVERGENCE_BPS)
