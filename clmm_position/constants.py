"""
CLMM 포지션 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q32: fee growth 인코딩에 사용 (2^32)
- U64_MAX / I64_MIN / I64_MAX: 고정 폭 정수 범위
- POSITION_SEED: 포지션 주소 유도에 사용되는 시드
"""

# Fixed-point 인코딩 상수
RESOLUTION: int = 32
Q32: int = 2 ** RESOLUTION

# 고정 폭 정수 범위
U8_MAX: int = 2 ** 8 - 1
U32_MAX: int = 2 ** 32 - 1
U64_MAX: int = 2 ** 64 - 1
U128_MAX: int = 2 ** 128 - 1
I32_MIN: int = -(2 ** 31)
I32_MAX: int = 2 ** 31 - 1
I64_MIN: int = -(2 ** 63)
I64_MAX: int = 2 ** 63 - 1

# 포지션 주소 시드
POSITION_SEED: bytes = b"ps"

# 토큰/소유자 식별자 길이 (bytes)
IDENTITY_LENGTH: int = 32
