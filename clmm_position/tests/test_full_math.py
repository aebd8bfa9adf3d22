"""
Full Math 테스트

u64 mul-div 및 wrapping / checked 연산을 테스트합니다.
"""

import pytest

from ..math.full_math import (
    checked_u64,
    mul_div_floor,
    wrapping_add_u64,
    wrapping_sub_u64,
)
from ..constants import Q32, U64_MAX
from ..errors import FixedPointConversionError


class TestMulDivFloor:
    """mul_div_floor 테스트"""

    def test_exact_division(self):
        assert mul_div_floor(Q32, 1000, Q32) == 1000

    def test_rounds_down(self):
        """나머지는 버림"""
        assert mul_div_floor(1, 1, 2) == 0
        assert mul_div_floor(7, 3, 2) == 10

    def test_wide_intermediate(self):
        """a × b가 u64를 넘어도 결과가 들어가면 성공"""
        assert mul_div_floor(U64_MAX, Q32, Q32) == U64_MAX
        assert mul_div_floor(U64_MAX, U64_MAX, U64_MAX) == U64_MAX

    def test_result_overflow_fails(self):
        """결과가 u64를 초과하면 FixedPointConversionError"""
        with pytest.raises(FixedPointConversionError):
            mul_div_floor(U64_MAX, U64_MAX, Q32)

    def test_conversion_error_is_overflow_error(self):
        with pytest.raises(OverflowError):
            mul_div_floor(U64_MAX, 2, 1)

    def test_zero_denominator(self):
        with pytest.raises(ValueError):
            mul_div_floor(1, 1, 0)

    def test_operand_out_of_range(self):
        with pytest.raises(ValueError):
            mul_div_floor(-1, 1, 1)
        with pytest.raises(ValueError):
            mul_div_floor(1, U64_MAX + 1, 1)


class TestWrapping:
    """wrapping_add_u64 / wrapping_sub_u64 테스트"""

    def test_add_without_overflow(self):
        assert wrapping_add_u64(1, 2) == 3

    def test_add_wraps(self):
        assert wrapping_add_u64(U64_MAX, 1) == 0
        assert wrapping_add_u64(U64_MAX, U64_MAX) == U64_MAX - 1

    def test_sub_without_underflow(self):
        assert wrapping_sub_u64(10, 3) == 7

    def test_sub_wraps(self):
        """감소하면 2^64 모듈러 차이"""
        assert wrapping_sub_u64(0, 1) == U64_MAX
        assert wrapping_sub_u64(Q32 - 1, U64_MAX) == Q32

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            wrapping_add_u64(U64_MAX + 1, 0)
        with pytest.raises(ValueError):
            wrapping_sub_u64(0, -1)


class TestCheckedU64:
    """checked_u64 테스트"""

    def test_in_range(self):
        assert checked_u64(0) == 0
        assert checked_u64(U64_MAX) == U64_MAX

    def test_out_of_range(self):
        with pytest.raises(FixedPointConversionError):
            checked_u64(U64_MAX + 1)
        with pytest.raises(FixedPointConversionError):
            checked_u64(-1)
