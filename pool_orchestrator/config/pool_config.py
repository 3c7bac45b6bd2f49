"""
Pool Configuration
==================
Fee schedule, curve selection and LP-token precision for a new pool.

These values are fixed on-chain at initialization and cannot be changed
afterwards by this system, so they are validated before any submission.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Tuple

from pool_orchestrator.shared.execution.execution_result import InvalidFeeScheduleError

U64_MAX = 2**64 - 1


class CurveType(IntEnum):
    """Swap pricing curves understood by the token-swap program."""

    CONSTANT_PRODUCT = 0
    CONSTANT_PRICE = 1
    STABLE = 2
    OFFSET = 3


@dataclass(frozen=True)
class FeeSchedule:
    """Four numerator/denominator fee pairs (u64 each)."""

    trade_fee_numerator: int = 0
    trade_fee_denominator: int = 10000
    owner_trade_fee_numerator: int = 5
    owner_trade_fee_denominator: int = 10000
    owner_withdraw_fee_numerator: int = 0
    owner_withdraw_fee_denominator: int = 0
    host_fee_numerator: int = 5
    host_fee_denominator: int = 100

    def __post_init__(self):
        for name, value in self.as_dict().items():
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidFeeScheduleError(f"{name} must be an integer, got {value!r}")
            if value < 0 or value > U64_MAX:
                raise InvalidFeeScheduleError(f"{name} out of u64 range: {value}")

        for label, (numerator, denominator) in self.pairs().items():
            if numerator != 0 and denominator == 0:
                raise InvalidFeeScheduleError(
                    f"{label} fee has numerator {numerator} but zero denominator"
                )
            if denominator != 0 and numerator >= denominator:
                raise InvalidFeeScheduleError(
                    f"{label} fee {numerator}/{denominator} must be below 100%"
                )

    def pairs(self) -> Dict[str, Tuple[int, int]]:
        return {
            "trade": (self.trade_fee_numerator, self.trade_fee_denominator),
            "owner_trade": (self.owner_trade_fee_numerator, self.owner_trade_fee_denominator),
            "owner_withdraw": (self.owner_withdraw_fee_numerator, self.owner_withdraw_fee_denominator),
            "host": (self.host_fee_numerator, self.host_fee_denominator),
        }

    def as_dict(self) -> Dict[str, int]:
        return {
            "trade_fee_numerator": self.trade_fee_numerator,
            "trade_fee_denominator": self.trade_fee_denominator,
            "owner_trade_fee_numerator": self.owner_trade_fee_numerator,
            "owner_trade_fee_denominator": self.owner_trade_fee_denominator,
            "owner_withdraw_fee_numerator": self.owner_withdraw_fee_numerator,
            "owner_withdraw_fee_denominator": self.owner_withdraw_fee_denominator,
            "host_fee_numerator": self.host_fee_numerator,
            "host_fee_denominator": self.host_fee_denominator,
        }

    def as_tuple(self) -> Tuple[int, ...]:
        """Fields in on-chain serialization order."""
        return tuple(self.as_dict().values())


@dataclass(frozen=True)
class PoolConfig:
    """Configuration passed to pool initialization."""

    fees: FeeSchedule = field(default_factory=FeeSchedule)
    curve_type: CurveType = CurveType.CONSTANT_PRODUCT
    lp_decimals: int = 2

    def __post_init__(self):
        if not isinstance(self.curve_type, CurveType):
            object.__setattr__(self, "curve_type", CurveType(self.curve_type))
        if not 0 <= self.lp_decimals <= 255:
            raise ValueError(f"lp_decimals must fit in a u8, got {self.lp_decimals}")


DEFAULT_POOL_CONFIG = PoolConfig()
