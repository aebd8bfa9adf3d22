"""
State layer: 포지션 레코드, 주소 키, 감사 이벤트
"""

from .position import PositionState, PositionUpdate, PositionKey, PositionBook
from .events import MintEvent, BurnEvent, CollectEvent
