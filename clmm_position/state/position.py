"""
Position - 포지션 원장

포지션은 소유자가 하한/상한 틱 사이에 공급한 유동성과
마지막 갱신 이후 누적된 수수료를 추적합니다.

Position-Indexed State:
- liquidity: 포지션 유동성 (l)
- fee_growth_inside_{0,1}_last_x32: 마지막 갱신 시 fee growth inside 스냅샷 (f_r(t_0), Q32)
- tokens_owed_{0,1}: 수령하지 않은 수수료 (토큰 최소 단위)

레코드 잠금은 호출자(저장소/트랜잭션 계층)의 책임입니다.
update 호출 동안 다른 주체가 레코드를 관찰하거나 변경하지 않는다고 가정합니다.
"""

import hashlib
import logging
import numbers
import struct
from dataclasses import dataclass, fields
from typing import Dict, Iterator, List, NamedTuple

from ..constants import (
    IDENTITY_LENGTH,
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MIN,
    POSITION_SEED,
    U32_MAX,
    U64_MAX,
    U8_MAX,
)
from ..errors import NoLiquidityError
from ..math.fee_math import calculate_tokens_owed
from ..math.full_math import wrapping_add_u64
from ..math.liquidity_math import add_delta

logger = logging.getLogger(__name__)

# bump(u8) + liquidity + fee growth 스냅샷 2개 + tokens owed 2개 (u64), 리틀엔디언, 패딩 없음
_LAYOUT = struct.Struct("<B5Q")


def _require_integer(value, name: str) -> int:
    """정수(bool 제외)만 허용, numpy 정수는 int로 변환"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name}은(는) 정수여야 합니다: {value!r}")
    return int(value)


class PositionUpdate(NamedTuple):
    """update 결과 (호출자가 감사 이벤트에 보고하는 수치)"""
    liquidity_before: int
    liquidity_after: int
    tokens_owed_0: int  # 이번 호출에서 적립된 token0 수수료
    tokens_owed_1: int  # 이번 호출에서 적립된 token1 수수료
    fees_changed: bool  # tokens owed 합계가 갱신되었는지 여부


@dataclass
class PositionState:
    """포지션 레코드

    PDA: [POSITION_SEED, token_0, token_1, fee, owner, tick_lower, tick_upper]
    """
    bump: int = 0
    liquidity: int = 0
    fee_growth_inside_0_last_x32: int = 0
    fee_growth_inside_1_last_x32: int = 0
    tokens_owed_0: int = 0
    tokens_owed_1: int = 0

    LEN = _LAYOUT.size

    def update(
        self,
        liquidity_delta: int,
        fee_growth_inside_0_x32: int,
        fee_growth_inside_1_x32: int
    ) -> PositionUpdate:
        """포지션에 누적 수수료 적립 및 유동성 갱신

        수수료는 갱신 전 유동성으로 계산합니다 (누적값이 증가하는 동안
        유효했던 유동성). 어느 단계에서든 실패하면 레코드는 변경되지 않습니다.

        Args:
            liquidity_delta: 유동성 변화량 (i64, 0이면 poke)
            fee_growth_inside_0_x32: 포지션 범위 내 token0 누적 fee growth (Q32)
            fee_growth_inside_1_x32: 포지션 범위 내 token1 누적 fee growth (Q32)

        Returns:
            PositionUpdate

        Raises:
            ValueError: 입력이 정수가 아니거나 i64 / u64 범위 밖인 경우
            NoLiquidityError: 유동성 0인 포지션에 poke한 경우
            LiquiditySubError / LiquidityAddError: 유동성 언더/오버플로우
            FixedPointConversionError: 수수료가 u64를 초과하는 경우
        """
        liquidity_delta = _require_integer(liquidity_delta, "유동성 delta")
        fee_growth_inside_0_x32 = _require_integer(fee_growth_inside_0_x32, "fee growth")
        fee_growth_inside_1_x32 = _require_integer(fee_growth_inside_1_x32, "fee growth")
        if not I64_MIN <= liquidity_delta <= I64_MAX:
            raise ValueError(f"유동성 delta가 i64 범위를 벗어났습니다: {liquidity_delta}")
        for value in (fee_growth_inside_0_x32, fee_growth_inside_1_x32):
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"fee growth가 u64 범위를 벗어났습니다: {value}")

        if liquidity_delta == 0:
            if self.liquidity == 0:
                raise NoLiquidityError()
            liquidity_next = self.liquidity
        else:
            liquidity_next = add_delta(self.liquidity, liquidity_delta)

        # 누적 수수료 계산 (갱신 전 유동성 사용)
        tokens_owed_0 = calculate_tokens_owed(
            fee_growth_inside_0_x32, self.fee_growth_inside_0_last_x32, self.liquidity
        )
        tokens_owed_1 = calculate_tokens_owed(
            fee_growth_inside_1_x32, self.fee_growth_inside_1_last_x32, self.liquidity
        )

        liquidity_before = self.liquidity

        # 포지션 갱신
        if liquidity_delta != 0:
            self.liquidity = liquidity_next
        self.fee_growth_inside_0_last_x32 = fee_growth_inside_0_x32
        self.fee_growth_inside_1_last_x32 = fee_growth_inside_1_x32

        fees_changed = tokens_owed_0 > 0 or tokens_owed_1 > 0
        if fees_changed:
            # 오버플로우 허용: U64_MAX에 도달하기 전에 수령해야 함
            owed_0 = wrapping_add_u64(self.tokens_owed_0, tokens_owed_0)
            owed_1 = wrapping_add_u64(self.tokens_owed_1, tokens_owed_1)
            if owed_0 < self.tokens_owed_0 or owed_1 < self.tokens_owed_1:
                logger.warning(
                    "tokens owed wrapped past u64 max: (%d, %d) -> (%d, %d)",
                    self.tokens_owed_0, self.tokens_owed_1, owed_0, owed_1
                )
            self.tokens_owed_0 = owed_0
            self.tokens_owed_1 = owed_1

        logger.debug(
            "position updated: delta=%d liquidity %d -> %d, accrued (%d, %d)",
            liquidity_delta, liquidity_before, self.liquidity, tokens_owed_0, tokens_owed_1
        )

        return PositionUpdate(
            liquidity_before=liquidity_before,
            liquidity_after=self.liquidity,
            tokens_owed_0=tokens_owed_0,
            tokens_owed_1=tokens_owed_1,
            fees_changed=fees_changed
        )

    def pack(self) -> bytes:
        """고정 크기(41 bytes) 레코드로 직렬화"""
        if not 0 <= self.bump <= U8_MAX:
            raise ValueError(f"bump가 u8 범위를 벗어났습니다: {self.bump}")
        values = [getattr(self, f.name) for f in fields(self)]
        for value in values[1:]:
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"필드가 u64 범위를 벗어났습니다: {value}")
        return _LAYOUT.pack(*values)

    @classmethod
    def unpack(cls, data: bytes) -> "PositionState":
        """pack()으로 만든 레코드를 역직렬화"""
        if len(data) != cls.LEN:
            raise ValueError(f"레코드 길이 오류: {len(data)} (필요: {cls.LEN})")
        return cls(*_LAYOUT.unpack(data))


def _require_identity(value: bytes, name: str) -> None:
    if len(value) != IDENTITY_LENGTH:
        raise ValueError(f"{name}은(는) {IDENTITY_LENGTH} bytes여야 합니다: {len(value)}")


class PositionKey(NamedTuple):
    """포지션 식별 키 (토큰 쌍, 수수료 티어, 소유자, 틱 범위)

    틱 범위는 호출자가 검증합니다.
    """
    token_0: bytes
    token_1: bytes
    fee: int
    owner: bytes
    tick_lower: int
    tick_upper: int

    def seeds(self) -> List[bytes]:
        """주소 유도용 시드 목록"""
        _require_identity(self.token_0, "token_0")
        _require_identity(self.token_1, "token_1")
        _require_identity(self.owner, "owner")
        if not 0 <= self.fee <= U32_MAX:
            raise ValueError(f"fee가 u32 범위를 벗어났습니다: {self.fee}")
        for tick in (self.tick_lower, self.tick_upper):
            if not I32_MIN <= tick <= I32_MAX:
                raise ValueError(f"틱이 i32 범위를 벗어났습니다: {tick}")

        return [
            POSITION_SEED,
            self.token_0,
            self.token_1,
            self.fee.to_bytes(4, "big"),
            self.owner,
            self.tick_lower.to_bytes(4, "big", signed=True),
            self.tick_upper.to_bytes(4, "big", signed=True),
        ]

    def address(self) -> bytes:
        """결정적 32 bytes 주소"""
        return hashlib.sha256(b"".join(self.seeds())).digest()


class PositionBook:
    """메모리 내 포지션 조회

    처음 참조되는 키는 0으로 초기화된 포지션을 생성합니다.
    포지션을 삭제하지 않으며 영속화하지 않습니다.

    사용법:
        book = PositionBook()
        position = book.get(key)
        position.update(1000, fee_growth_inside_0, fee_growth_inside_1)
    """

    def __init__(self):
        self._positions: Dict[bytes, PositionState] = {}
        self._keys: Dict[bytes, PositionKey] = {}

    def get(self, key: PositionKey) -> PositionState:
        """포지션 조회 (없으면 생성)"""
        address = key.address()
        if address not in self._positions:
            logger.debug("creating position %s", address.hex())
            self._positions[address] = PositionState()
            self._keys[address] = key
        return self._positions[address]

    def __contains__(self, key: PositionKey) -> bool:
        return key.address() in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[PositionKey]:
        return iter(self._keys.values())
