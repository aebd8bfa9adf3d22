#!/usr/bin/env python3
"""
Replay Position - CSV 업데이트 시퀀스를 포지션에 재생

Usage:
    # 빈 포지션에서 시작
    python -m clmm_position.scripts.replay_position --csv updates.csv

    # 초기 유동성 지정, 결과 저장
    python -m clmm_position.scripts.replay_position --csv updates.csv --liquidity 1000 --out history.csv

    # 실패한 단계는 기록하고 계속 (빈 셀, 범위 초과 값 포함)
    python -m clmm_position.scripts.replay_position --csv updates.csv --keep-going

CSV 컬럼: liquidity_delta, fee_growth_inside_0_x32, fee_growth_inside_1_x32
"""

import argparse
import sys
from typing import List, Optional

import pandas as pd

from clmm_position.config import configure_logging
from clmm_position.errors import PositionError
from clmm_position.math import decode_fee_growth
from clmm_position.simulation import replay_updates
from clmm_position.state import PositionState


def load_updates(path: str) -> pd.DataFrame:
    """CSV 로드 (u64 정밀도 유지를 위해 문자열로 읽음)"""
    return pd.read_csv(path, dtype=str)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay liquidity/fee-growth updates against a position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--csv", type=str, required=True, help="업데이트 CSV 파일 경로")
    parser.add_argument("--liquidity", type=int, default=0, help="초기 유동성 (기본: 0)")
    parser.add_argument("--out", type=str, default=None, help="결과 CSV 저장 경로")
    parser.add_argument("--keep-going", action="store_true", help="실패한 단계 기록 후 계속")
    parser.add_argument("--decimals", type=int, default=9, help="fee growth 표시용 토큰 소수점 자릿수 (기본: 9)")
    parser.add_argument("--log-level", type=str, default=None, help="로그 레벨 (기본: CLMM_LOG_LEVEL)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    updates = load_updates(args.csv)
    position = PositionState(liquidity=args.liquidity)

    try:
        history = replay_updates(
            updates,
            position=position,
            stop_on_error=False if args.keep_going else True
        )
    except PositionError as e:
        print(f"❌ 재생 실패: [{e.code}] {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"❌ 입력 오류: {e}", file=sys.stderr)
        return 1

    if args.out:
        history.to_csv(args.out, index=False)
        print(f"✅ 저장 완료: {args.out} ({len(history)} steps)")
    else:
        print(history.to_string(index=False))

    print(f"liquidity={position.liquidity} "
          f"tokens_owed_0={position.tokens_owed_0} tokens_owed_1={position.tokens_owed_1}")
    print(f"fee_growth_inside_0={decode_fee_growth(position.fee_growth_inside_0_last_x32, args.decimals):.12g} "
          f"fee_growth_inside_1={decode_fee_growth(position.fee_growth_inside_1_last_x32, args.decimals):.12g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
