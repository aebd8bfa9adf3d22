"""
포지션 감사 이벤트

민트/번/수령 성공 시 호출자가 발행하는 이벤트 레코드.
이 패키지는 이벤트를 발행하지 않으며, PositionState.update의 반환값이
이벤트가 보고하는 수치를 제공합니다.

인덱싱 필드: pool_state, tick_lower, tick_upper
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class MintEvent:
    """포지션에 유동성이 민트되었을 때"""
    pool_state: bytes  # 풀 주소
    sender: bytes  # 유동성을 민트한 주소
    owner: bytes  # 포지션 소유자
    tick_lower: int
    tick_upper: int
    amount: int  # 민트된 유동성
    amount_0: int  # 필요했던 token0
    amount_1: int  # 필요했던 token1

    def index_key(self) -> Tuple[bytes, int, int]:
        return self.pool_state, self.tick_lower, self.tick_upper

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BurnEvent:
    """포지션 유동성이 제거되었을 때

    수수료는 인출하지 않습니다 (CollectEvent 참조).
    """
    pool_state: bytes
    owner: bytes
    tick_lower: int
    tick_upper: int
    amount: int  # 제거된 유동성
    amount_0: int
    amount_1: int

    def index_key(self) -> Tuple[bytes, int, int]:
        return self.pool_state, self.tick_lower, self.tick_upper

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CollectEvent:
    """소유자가 수수료를 수령했을 때 (0 수령도 가능)"""
    pool_state: bytes
    owner: bytes
    tick_lower: int
    tick_upper: int
    amount_0: int
    amount_1: int

    def index_key(self) -> Tuple[bytes, int, int]:
        return self.pool_state, self.tick_lower, self.tick_upper

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
