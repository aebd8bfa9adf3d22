"""
Concentrated Liquidity Position Ledger

집중화된 유동성 포지션의 유동성 및 수수료 적립을 온체인 수준 정밀도로
계산하는 라이브러리. Q32 fee growth 누적값 기반 수수료 계산 구현.
"""

__version__ = "0.1.0"

from .constants import Q32, U64_MAX, I64_MIN, I64_MAX, POSITION_SEED
from .errors import (
    PositionError,
    NoLiquidityError,
    LiquidityMathError,
    LiquiditySubError,
    LiquidityAddError,
    FixedPointConversionError,
)
from .state import PositionState, PositionUpdate, PositionKey, PositionBook
