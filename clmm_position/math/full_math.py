"""
Full Math - u64 고정 폭 산술

온체인 u64 연산을 Python 정수로 재현합니다.
연산 모드(wrapping / checked)는 호출 지점마다 명시적으로 선택합니다.

- mul_div_floor: 넓은 중간값으로 (a × b) / denominator 계산 후 u64 변환 (checked)
- wrapping_add_u64 / wrapping_sub_u64: 2^64 모듈러 연산 (오버플로우 허용)
- checked_u64: u64 범위 검사 (초과 시 FixedPointConversionError)
"""

from ..constants import U64_MAX
from ..errors import FixedPointConversionError

_U64_MODULUS = U64_MAX + 1


def _require_u64(value: int, name: str) -> None:
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{name}이(가) u64 범위를 벗어났습니다: {value}")


def checked_u64(value: int) -> int:
    """u64 범위에 들어가는 값만 반환

    Raises:
        FixedPointConversionError: 값이 0 ~ U64_MAX 범위 밖인 경우
    """
    if not 0 <= value <= U64_MAX:
        raise FixedPointConversionError(f"u64로 변환할 수 없습니다: {value}")
    return value


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """floor(a × b / denominator)

    중간값 a × b는 최대 128비트이며 Python 정수로 손실 없이 계산됩니다.
    최종 결과만 u64로 변환합니다.

    Args:
        a: 피승수 (u64)
        b: 승수 (u64)
        denominator: 제수 (u64, 0 불가)

    Returns:
        내림 결과 (u64)

    Raises:
        ValueError: 입력이 u64 범위 밖이거나 denominator가 0인 경우
        FixedPointConversionError: 결과가 u64를 초과하는 경우
    """
    _require_u64(a, "a")
    _require_u64(b, "b")
    _require_u64(denominator, "denominator")
    if denominator == 0:
        raise ValueError("denominator는 0일 수 없습니다")

    return checked_u64((a * b) // denominator)


def wrapping_add_u64(a: int, b: int) -> int:
    """(a + b) mod 2^64"""
    _require_u64(a, "a")
    _require_u64(b, "b")
    return (a + b) % _U64_MODULUS


def wrapping_sub_u64(a: int, b: int) -> int:
    """(a - b) mod 2^64

    a < b이면 음수 대신 2^64를 더한 값이 됩니다 (u64 랩어라운드).
    """
    _require_u64(a, "a")
    _require_u64(b, "b")
    return (a - b) % _U64_MODULUS
