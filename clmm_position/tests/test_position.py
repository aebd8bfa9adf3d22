"""
Position 테스트

포지션 update 알고리즘, 레코드 레이아웃, 주소 키를 테스트합니다.
"""

import logging
from dataclasses import replace

import pytest

from ..state.position import PositionState, PositionUpdate, PositionKey, PositionBook
from ..constants import Q32, U64_MAX, I64_MAX, POSITION_SEED
from ..errors import (
    NoLiquidityError,
    LiquidityAddError,
    LiquiditySubError,
    FixedPointConversionError,
)

TOKEN_0 = bytes([1]) * 32
TOKEN_1 = bytes([2]) * 32
OWNER = bytes([3]) * 32


@pytest.fixture
def position():
    """liquidity = 1000, 스냅샷 (0, 0)"""
    return PositionState(liquidity=1000)


class TestPoke:
    """liquidity_delta == 0 테스트"""

    def test_poke_on_empty_rejected(self):
        position = PositionState()
        with pytest.raises(NoLiquidityError):
            position.update(0, Q32, Q32)
        assert position == PositionState()

    def test_poke_accrues_fees(self, position):
        result = position.update(0, Q32, 0)

        assert position.liquidity == 1000
        assert position.tokens_owed_0 == 1000
        assert position.tokens_owed_1 == 0
        assert position.fee_growth_inside_0_last_x32 == Q32
        assert position.fee_growth_inside_1_last_x32 == 0
        assert result == PositionUpdate(1000, 1000, 1000, 0, True)

    def test_repeated_poke_is_idempotent(self, position):
        position.update(0, Q32, Q32)
        owed = (position.tokens_owed_0, position.tokens_owed_1)

        result = position.update(0, Q32, Q32)

        assert (position.tokens_owed_0, position.tokens_owed_1) == owed
        assert result.fees_changed is False

    def test_error_code(self):
        assert NoLiquidityError.code == "NP"


class TestMintAndBurn:
    """liquidity_delta != 0 테스트"""

    def test_fees_use_pre_update_liquidity(self, position):
        position.update(0, Q32, 0)

        result = position.update(500, 2 * Q32, 0)

        # (2^33 - 2^32) × 1000 / 2^32 = 1000 (1500이 아님)
        assert result.tokens_owed_0 == 1000
        assert position.tokens_owed_0 == 2000
        assert position.liquidity == 1500
        assert position.fee_growth_inside_0_last_x32 == 2 * Q32
        assert result.liquidity_before == 1000
        assert result.liquidity_after == 1500

    def test_mint_into_empty_position_accrues_nothing(self):
        position = PositionState()

        result = position.update(1000, 5 * Q32, 7 * Q32)

        assert position.liquidity == 1000
        assert position.tokens_owed_0 == 0
        assert position.tokens_owed_1 == 0
        assert position.fee_growth_inside_0_last_x32 == 5 * Q32
        assert position.fee_growth_inside_1_last_x32 == 7 * Q32
        assert result.fees_changed is False

    def test_burn_accrues_on_full_liquidity(self, position):
        result = position.update(-1000, Q32, 2 * Q32)

        assert position.liquidity == 0
        assert position.tokens_owed_0 == 1000
        assert position.tokens_owed_1 == 2000
        assert result.tokens_owed_1 == 2000

    def test_burn_more_than_held_leaves_record_unchanged(self, position):
        position.update(500, Q32, 0)
        before = replace(position)

        with pytest.raises(LiquiditySubError):
            position.update(-2000, 3 * Q32, 3 * Q32)

        assert position == before

    def test_mint_overflow_leaves_record_unchanged(self):
        position = PositionState(liquidity=U64_MAX)
        before = replace(position)

        with pytest.raises(LiquidityAddError):
            position.update(1, Q32, Q32)

        assert position == before


class TestFeeAccrual:
    """수수료 적립 테스트"""

    def test_snapshot_advances_without_fees(self, position):
        """수수료가 0이어도 스냅샷은 갱신"""
        result = position.update(0, 1, 1)

        assert result.tokens_owed_0 == 0
        assert result.fees_changed is False
        assert position.fee_growth_inside_0_last_x32 == 1
        assert position.fee_growth_inside_1_last_x32 == 1

    def test_accumulator_wraparound(self):
        position = PositionState(liquidity=1000, fee_growth_inside_0_last_x32=U64_MAX)

        position.update(0, Q32 - 1, 0)

        assert position.tokens_owed_0 == 1000
        assert position.fee_growth_inside_0_last_x32 == Q32 - 1

    def test_owed_totals_wrap(self, caplog):
        position = PositionState(liquidity=1, tokens_owed_0=U64_MAX)

        with caplog.at_level(logging.WARNING, logger="clmm_position.state.position"):
            position.update(0, 2 * Q32, 0)

        assert position.tokens_owed_0 == 1
        assert "wrapped" in caplog.text

    def test_conversion_failure_leaves_record_unchanged(self):
        position = PositionState(liquidity=U64_MAX)
        before = replace(position)

        with pytest.raises(FixedPointConversionError):
            position.update(-1, U64_MAX, 0)

        assert position == before

    def test_second_token_overflow_leaves_record_unchanged(self):
        position = PositionState(liquidity=U64_MAX)
        before = replace(position)

        with pytest.raises(FixedPointConversionError):
            position.update(0, 0, U64_MAX)

        assert position == before


class TestInputDomain:
    """입력 범위 검사"""

    @pytest.mark.parametrize("delta", [I64_MAX + 1, -(2 ** 63) - 1])
    def test_delta_out_of_range(self, position, delta):
        with pytest.raises(ValueError):
            position.update(delta, 0, 0)

    @pytest.mark.parametrize("fee_growth", [-1, U64_MAX + 1])
    def test_fee_growth_out_of_range(self, position, fee_growth):
        before = replace(position)
        with pytest.raises(ValueError):
            position.update(0, fee_growth, 0)
        with pytest.raises(ValueError):
            position.update(0, 0, fee_growth)
        assert position == before

    @pytest.mark.parametrize("value", [1.5, 2.0, True, "1", None])
    def test_non_integer_rejected(self, position, value):
        """정수가 아닌 입력은 상태를 바꾸지 않고 거부"""
        before = replace(position)
        with pytest.raises(ValueError):
            position.update(0, value, 0)
        with pytest.raises(ValueError):
            position.update(value, Q32, Q32)
        assert position == before
        assert isinstance(position.pack(), bytes)


class TestLayout:
    """고정 크기 레코드 레이아웃"""

    def test_len(self):
        assert PositionState.LEN == 41
        assert len(PositionState().pack()) == 41

    def test_field_order_little_endian(self):
        data = PositionState(1, 2, 3, 4, 5, 6).pack()

        assert data[0] == 1
        assert data[1:9] == (2).to_bytes(8, "little")
        assert data[33:41] == (6).to_bytes(8, "little")

    def test_unpack(self):
        position = PositionState(255, 1000, Q32, U64_MAX, 7, 0)
        assert PositionState.unpack(position.pack()) == position

    def test_unpack_wrong_length(self):
        with pytest.raises(ValueError):
            PositionState.unpack(b"\x00" * 40)

    def test_pack_out_of_range(self):
        with pytest.raises(ValueError):
            PositionState(bump=256).pack()
        with pytest.raises(ValueError):
            PositionState(liquidity=U64_MAX + 1).pack()


class TestPositionKey:
    """포지션 주소 키"""

    def make_key(self, owner=OWNER, tick_lower=-60, tick_upper=60):
        return PositionKey(TOKEN_0, TOKEN_1, 3000, owner, tick_lower, tick_upper)

    def test_seeds(self):
        seeds = self.make_key().seeds()

        assert seeds[0] == POSITION_SEED
        assert seeds[3] == (3000).to_bytes(4, "big")
        assert seeds[4] == OWNER
        assert seeds[5] == b"\xff\xff\xff\xc4"
        assert seeds[6] == b"\x00\x00\x00\x3c"

    def test_address_deterministic(self):
        assert self.make_key().address() == self.make_key().address()
        assert len(self.make_key().address()) == 32

    def test_address_distinct(self):
        base = self.make_key().address()
        assert self.make_key(owner=bytes([4]) * 32).address() != base
        assert self.make_key(tick_upper=120).address() != base

    def test_invalid_identity(self):
        with pytest.raises(ValueError):
            self.make_key(owner=b"short").address()

    def test_invalid_tick(self):
        with pytest.raises(ValueError):
            self.make_key(tick_lower=-(2 ** 31) - 1).seeds()


class TestPositionBook:
    """메모리 내 포지션 조회"""

    def test_get_creates_zero_position(self):
        book = PositionBook()
        key = PositionKey(TOKEN_0, TOKEN_1, 500, OWNER, 0, 10)

        assert key not in book
        position = book.get(key)

        assert position == PositionState()
        assert key in book
        assert len(book) == 1

    def test_get_returns_same_record(self):
        book = PositionBook()
        key = PositionKey(TOKEN_0, TOKEN_1, 500, OWNER, 0, 10)

        book.get(key).update(100, 0, 0)

        assert book.get(key).liquidity == 100
        assert list(book) == [key]
