"""Unit tests for basis-point and WAD fixed-point helpers."""

import math

import pytest

from src.ct_common.fixed_point import (
    WAD,
    bps_of,
    drop_bps,
    isqrt_newton,
    saturating_sub,
    wad_mul,
)


class TestBps:
    def test_bps_truncates(self) -> None:
        assert bps_of(1, 3) == 3333

    def test_drop_from_ten_to_six(self) -> None:
        assert drop_bps(6 * WAD, 10 * WAD) == 4000

    def test_no_drop_when_price_rose(self) -> None:
        assert drop_bps(12, 10) == 0

    def test_no_drop_when_equal(self) -> None:
        assert drop_bps(10, 10) == 0


class TestSaturatingSub:
    def test_normal(self) -> None:
        assert saturating_sub(10, 3) == 7

    def test_clamps_at_zero(self) -> None:
        assert saturating_sub(3, 10) == 0


class TestWadMul:
    def test_identity(self) -> None:
        assert wad_mul(7 * WAD, WAD) == 7 * WAD

    def test_truncates(self) -> None:
        assert wad_mul(1, 1) == 0


class TestIsqrtNewton:
    @pytest.mark.parametrize("x", [0, 1, 2, 3, 4, 15, 16, 17, 99, 10**18, 2**255 + 12345])
    def test_matches_floor_sqrt(self, x: int) -> None:
        assert isqrt_newton(x) == math.isqrt(x)

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            isqrt_newton(-1)
