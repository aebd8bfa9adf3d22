"""
Replay - 포지션 업데이트 시퀀스 재생

fee growth inside 누적값 시계열과 유동성 변화량을 순서대로 적용하여
단계별 포지션 상태를 DataFrame으로 반환합니다.

입력 컬럼:
    liquidity_delta, fee_growth_inside_0_x32, fee_growth_inside_1_x32
"""

import logging
import numbers
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from ..config import settings
from ..errors import PositionError
from ..state.position import PositionState

logger = logging.getLogger(__name__)

UPDATE_COLUMNS = [
    "liquidity_delta",
    "fee_growth_inside_0_x32",
    "fee_growth_inside_1_x32",
]

HISTORY_COLUMNS = [
    "step",
    "liquidity_delta",
    "liquidity",
    "fee_growth_inside_0_last_x32",
    "fee_growth_inside_1_last_x32",
    "tokens_owed_0",
    "tokens_owed_1",
    "accrued_0",
    "accrued_1",
    "error",
]


# 입력값 오류 (빈 셀, 정수가 아닌 값, 범위 초과)
INVALID_INPUT_CODE = "VE"


def _to_int(value: Any, name: str) -> int:
    """CSV/numpy 값을 정확한 정수로 변환"""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"{name}: 정수가 아닙니다: {value!r}") from None
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name}: 정수가 아닙니다: {value!r}")
        return int(value)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name}: 정수가 아닙니다: {value!r}")
    return int(value)


def _iter_updates(updates: Union[pd.DataFrame, Iterable[Mapping[str, Any]]]):
    if isinstance(updates, pd.DataFrame):
        missing = [col for col in UPDATE_COLUMNS if col not in updates.columns]
        if missing:
            raise ValueError(f"Missing required column: {', '.join(missing)}")
        return updates[UPDATE_COLUMNS].to_dict("records")
    return updates


def replay_updates(
    updates: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
    position: Optional[PositionState] = None,
    stop_on_error: Optional[bool] = None
) -> pd.DataFrame:
    """업데이트 시퀀스를 포지션에 적용

    Args:
        updates: 업데이트 테이블 (DataFrame 또는 dict 목록)
        position: 시작 포지션 (None이면 빈 포지션). 제자리에서 변경됩니다.
        stop_on_error: True면 첫 실패에서 오류 발생, False면 error 코드 기록 후 계속
            (입력값 오류는 "VE", 실패한 단계에서 포지션은 변경되지 않음).
            None이면 settings.REPLAY_STOP_ON_ERROR 사용

    Returns:
        단계별 포지션 상태 DataFrame (HISTORY_COLUMNS)
    """
    if position is None:
        position = PositionState()
    if stop_on_error is None:
        stop_on_error = settings.REPLAY_STOP_ON_ERROR

    rows: List[dict] = []
    for step, update in enumerate(_iter_updates(updates)):
        liquidity_delta = None
        accrued_0 = accrued_1 = 0
        error = None
        try:
            liquidity_delta = _to_int(update["liquidity_delta"], "liquidity_delta")
            fee_growth_0 = _to_int(update["fee_growth_inside_0_x32"], "fee_growth_inside_0_x32")
            fee_growth_1 = _to_int(update["fee_growth_inside_1_x32"], "fee_growth_inside_1_x32")
            result = position.update(liquidity_delta, fee_growth_0, fee_growth_1)
            accrued_0, accrued_1 = result.tokens_owed_0, result.tokens_owed_1
        except (PositionError, ValueError) as e:
            if stop_on_error:
                raise
            error = getattr(e, "code", INVALID_INPUT_CODE)
            logger.error("replay step %d failed: [%s] %s", step, error, e)

        rows.append({
            "step": step,
            "liquidity_delta": liquidity_delta,
            "liquidity": position.liquidity,
            "fee_growth_inside_0_last_x32": position.fee_growth_inside_0_last_x32,
            "fee_growth_inside_1_last_x32": position.fee_growth_inside_1_last_x32,
            "tokens_owed_0": position.tokens_owed_0,
            "tokens_owed_1": position.tokens_owed_1,
            "accrued_0": accrued_0,
            "accrued_1": accrued_1,
            "error": error,
        })

    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)
