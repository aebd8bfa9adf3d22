"""
Math layer for the position ledger

온체인 수준 정밀도의 수학 함수들:
- full_math: u64 mul-div 및 wrapping / checked 연산
- liquidity_math: 유동성 delta 적용
- fee_math: fee growth 기반 수수료 계산
"""

from .full_math import (
    checked_u64,
    mul_div_floor,
    wrapping_add_u64,
    wrapping_sub_u64,
)
from .liquidity_math import add_delta
from .fee_math import (
    calculate_fee_growth_delta,
    calculate_tokens_owed,
    decode_fee_growth,
)
