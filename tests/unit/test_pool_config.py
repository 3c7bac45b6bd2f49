"""
Pool Configuration Tests
========================
Fee schedule invariants are enforced before anything is submitted.
"""

import pytest

from pool_orchestrator.config.pool_config import (
    CurveType,
    DEFAULT_POOL_CONFIG,
    FeeSchedule,
    PoolConfig,
    U64_MAX,
)
from pool_orchestrator.shared.execution.execution_result import (
    ErrorCode,
    InvalidFeeScheduleError,
)


class TestFeeSchedule:

    def test_defaults(self):
        fees = FeeSchedule()
        assert fees.pairs() == {
            "trade": (0, 10000),
            "owner_trade": (5, 10000),
            "owner_withdraw": (0, 0),
            "host": (5, 100),
        }

    def test_serialization_order(self):
        assert FeeSchedule().as_tuple() == (0, 10000, 5, 10000, 0, 0, 5, 100)

    def test_zero_over_zero_allowed(self):
        fees = FeeSchedule(trade_fee_numerator=0, trade_fee_denominator=0)
        assert fees.trade_fee_denominator == 0

    @pytest.mark.parametrize("field", [
        "trade_fee",
        "owner_trade_fee",
        "owner_withdraw_fee",
        "host_fee",
    ])
    def test_nonzero_numerator_needs_denominator(self, field):
        with pytest.raises(InvalidFeeScheduleError, match="zero denominator") as exc_info:
            FeeSchedule(**{f"{field}_numerator": 1, f"{field}_denominator": 0})
        assert exc_info.value.code == ErrorCode.INVALID_FEE_SCHEDULE

    def test_invalid_schedule_is_value_error(self):
        with pytest.raises(ValueError):
            FeeSchedule(host_fee_numerator=3, host_fee_denominator=0)

    def test_fee_above_hundred_percent(self):
        with pytest.raises(InvalidFeeScheduleError, match="below 100%"):
            FeeSchedule(trade_fee_numerator=11, trade_fee_denominator=10)

    @pytest.mark.parametrize("field", [
        "trade_fee",
        "owner_trade_fee",
        "owner_withdraw_fee",
        "host_fee",
    ])
    def test_fee_of_exactly_hundred_percent(self, field):
        with pytest.raises(InvalidFeeScheduleError, match="below 100%"):
            FeeSchedule(**{f"{field}_numerator": 10000, f"{field}_denominator": 10000})

    def test_fee_just_below_hundred_percent(self):
        fees = FeeSchedule(trade_fee_numerator=9999, trade_fee_denominator=10000)
        assert fees.trade_fee_numerator == 9999

    def test_negative_rejected(self):
        with pytest.raises(InvalidFeeScheduleError, match="u64"):
            FeeSchedule(owner_trade_fee_numerator=-1)

    def test_overflow_rejected(self):
        with pytest.raises(InvalidFeeScheduleError, match="u64"):
            FeeSchedule(trade_fee_denominator=U64_MAX + 1)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidFeeScheduleError, match="integer"):
            FeeSchedule(host_fee_numerator=0.5)


class TestPoolConfig:

    def test_defaults(self):
        assert DEFAULT_POOL_CONFIG.fees == FeeSchedule()
        assert DEFAULT_POOL_CONFIG.curve_type == CurveType.CONSTANT_PRODUCT
        assert DEFAULT_POOL_CONFIG.lp_decimals == 2

    def test_curve_coerced_from_int(self):
        config = PoolConfig(curve_type=2)
        assert config.curve_type is CurveType.STABLE

    def test_unknown_curve_rejected(self):
        with pytest.raises(ValueError):
            PoolConfig(curve_type=9)

    def test_decimals_bounds(self):
        with pytest.raises(ValueError, match="u8"):
            PoolConfig(lp_decimals=256)
