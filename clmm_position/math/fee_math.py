"""
Fee Math - 포지션 수수료 계산

풀/틱 엔진이 계산한 fee growth inside 누적값(Q32)으로부터
포지션의 미수령 수수료를 계산합니다.

핵심 공식:
    Δf = f_r(t_1) - f_r(t_0)          (u64 랩어라운드)
    f_u = floor(Δf × l / 2^32)         (u64로 checked 변환)

fee growth inside 값 자체는 호출자가 제공하며, 여기서는 검증하지 않습니다.
"""

from ..constants import Q32
from .full_math import mul_div_floor, wrapping_sub_u64


def calculate_fee_growth_delta(
    fee_growth_current: int,
    fee_growth_previous: int
) -> int:
    """두 시점 간 fee growth 변화량 계산

    누적값이 감소한 것처럼 보이면 (외부 랩어라운드) 실패하지 않고
    u64 모듈러 차이를 그대로 변화량으로 사용합니다.

    Args:
        fee_growth_current: 현재 fee growth inside (Q32)
        fee_growth_previous: 마지막 스냅샷 (Q32)

    Returns:
        fee growth 변화량 (u64)
    """
    return wrapping_sub_u64(fee_growth_current, fee_growth_previous)


def calculate_tokens_owed(
    fee_growth_inside: int,
    fee_growth_inside_last: int,
    liquidity: int
) -> int:
    """미수령 수수료 계산 (f_u)

    Args:
        fee_growth_inside: 현재 범위 내 fee growth (f_r(t_1), Q32)
        fee_growth_inside_last: 마지막 업데이트 시 fee growth (f_r(t_0), Q32)
        liquidity: 누적값이 증가하는 동안 유효했던 유동성 (l)

    Returns:
        미수령 수수료 (토큰 최소 단위)

    Raises:
        FixedPointConversionError: 결과가 u64를 초과하는 경우
    """
    fee_growth_delta = calculate_fee_growth_delta(fee_growth_inside, fee_growth_inside_last)
    return mul_div_floor(fee_growth_delta, liquidity, Q32)


def decode_fee_growth(fee_growth_x32: int, decimals: int = 9) -> float:
    """Q32 인코딩된 fee growth를 human-readable 값으로 변환

    Args:
        fee_growth_x32: Q32 인코딩된 fee growth
        decimals: 토큰 소수점 자릿수

    Returns:
        Human-readable fee growth (토큰 단위)
    """
    return fee_growth_x32 / Q32 / (10 ** decimals)
