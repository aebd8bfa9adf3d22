"""
Liquidity Math - 유동성 delta 적용

부호 있는 유동성 변화량(i64)을 부호 없는 유동성(u64)에 더합니다.
결과가 음수이거나 u64를 초과하면 실패합니다 (checked 연산).

핵심 공식:
    L_next = L + ΔL,  0 <= L_next <= U64_MAX
"""

from ..constants import U64_MAX, I64_MIN, I64_MAX
from ..errors import LiquidityAddError, LiquiditySubError


def add_delta(liquidity: int, delta: int) -> int:
    """유동성에 부호 있는 delta 적용

    Args:
        liquidity: 현재 유동성 (u64)
        delta: 유동성 변화량 (i64, 음수면 제거)

    Returns:
        새 유동성 (u64)

    Raises:
        ValueError: 입력이 u64 / i64 범위 밖인 경우
        LiquiditySubError: 보유량보다 많이 제거하는 경우
        LiquidityAddError: 결과가 u64를 초과하는 경우
    """
    if not 0 <= liquidity <= U64_MAX:
        raise ValueError(f"유동성이 u64 범위를 벗어났습니다: {liquidity}")
    if not I64_MIN <= delta <= I64_MAX:
        raise ValueError(f"유동성 delta가 i64 범위를 벗어났습니다: {delta}")

    if delta < 0:
        result = liquidity - abs(delta)
        if result < 0:
            raise LiquiditySubError(
                f"유동성 부족: 보유 {liquidity}, 제거 요청 {abs(delta)}"
            )
    else:
        result = liquidity + delta
        if result > U64_MAX:
            raise LiquidityAddError(
                f"유동성 오버플로우: {liquidity} + {delta} > {U64_MAX}"
            )
    return result
