"""Integer arithmetic utilities for basis-point and WAD fixed-point math.

All prices are int in the smallest price unit (18-decimal "wei" convention).
All ratios are int basis points (1 bps = 0.01%). No float, no Decimal.
"""

BPS_DENOMINATOR = 10_000
WAD = 10**18


def bps_of(part: int, whole: int) -> int:
    """part / whole in basis points, truncating: part * 10000 // whole."""
    return part * BPS_DENOMINATOR // whole


def drop_bps(lower: int, higher: int) -> int:
    """Relative drop from higher to lower in bps; 0 when lower >= higher."""
    if lower >= higher:
        return 0
    return bps_of(higher - lower, higher)


def saturating_sub(a: int, b: int) -> int:
    """a - b, clamped at zero instead of going negative."""
    return a - b if a > b else 0


def wad_mul(a: int, b: int) -> int:
    """Fixed-point product of two WAD-scaled values, truncating."""
    return a * b // WAD


def isqrt_newton(x: int) -> int:
    """Floor of the square root of x via integer Newton iteration.

    Starts above the root and decreases monotonically; stops at the first
    iterate that no longer decreases, which is floor(sqrt(x)).
    """
    if x < 0:
        raise ValueError(f"isqrt of negative number: {x}")
    if x < 2:
        return x
    y = x
    z = (x + 1) // 2
    while z < y:
        y = z
        z = (x // z + z) // 2
    return y
