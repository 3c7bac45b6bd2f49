"""
Execution Errors & Results
==========================
Standardized error taxonomy and return types for every orchestrator path.

Failures are raised as OrchestratorError subclasses carrying an ErrorCode;
successful operations return the result dataclasses below.

Usage:
    try:
        result = await provisioner.finalize(...)
        log(result.pool_state)
    except OrchestratorError as e:
        handle_error(e.code)
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum
import time


class ErrorCode(Enum):
    """Standardized error codes for orchestration failures."""

    # Preconditions
    UNFUNDED_POOL = "UNFUNDED_POOL"
    INVALID_FEE_SCHEDULE = "INVALID_FEE_SCHEDULE"

    # Network
    REJECTED_TRANSACTION = "REJECTED_TRANSACTION"
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Addressing / keys
    DERIVATION_EXHAUSTED = "DERIVATION_EXHAUSTED"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"


# ═══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════════════

class OrchestratorError(Exception):
    """Base class for all orchestration failures."""

    code: ErrorCode = ErrorCode.REJECTED_TRANSACTION

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.code.value, "error_message": str(self)}


class UnfundedPoolError(OrchestratorError):
    """A pool holding account has zero balance; Phase 2 must not start."""

    code = ErrorCode.UNFUNDED_POOL

    def __init__(self, balances: Dict[str, int]):
        self.balances = dict(balances)
        empty = ", ".join(addr for addr, amount in self.balances.items() if amount == 0)
        super().__init__(f"Pool holding account(s) not funded: {empty}")


class RejectedTransactionError(OrchestratorError):
    """The network refused or failed to apply a transaction."""

    code = ErrorCode.REJECTED_TRANSACTION

    def __init__(self, message: str, payload: Any = None, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.payload = payload
        if code is not None:
            self.code = code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["payload"] = self.payload if isinstance(self.payload, (str, int, dict, list)) else repr(self.payload)
        return data


class DerivationExhaustedError(OrchestratorError):
    """No bump seed produced a valid program address."""

    code = ErrorCode.DERIVATION_EXHAUSTED


class KeyNotFoundError(OrchestratorError):
    """Key identifier has no backing material."""

    code = ErrorCode.KEY_NOT_FOUND


class AccountNotFoundError(OrchestratorError):
    """Queried account does not exist or is not initialized."""

    code = ErrorCode.ACCOUNT_NOT_FOUND

    def __init__(self, address: str, payload: Any = None):
        super().__init__(f"Account not found: {address}")
        self.address = address
        self.payload = payload


class InvalidFeeScheduleError(OrchestratorError, ValueError):
    """Fee schedule violates numerator/denominator invariants."""

    code = ErrorCode.INVALID_FEE_SCHEDULE


# ═══════════════════════════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class ProvisionResult:
    """Outcome of Phase 1: authority and holding accounts established."""

    authority: Any
    bump: int
    token_a_holding: Any
    token_b_holding: Any
    pool_state: Any
    tx_signature: str
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "authority": str(self.authority),
            "bump": self.bump,
            "token_a_holding": str(self.token_a_holding),
            "token_b_holding": str(self.token_b_holding),
            "pool_state": str(self.pool_state),
            "tx_signature": self.tx_signature,
        }


@dataclass
class FinalizeResult:
    """Outcome of Phase 2: an initialized, swappable pool."""

    pool_state: Any
    lp_mint: Any
    fee_account: Any
    pool_token_account: Any
    tx_signatures: List[str] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pool_state": str(self.pool_state),
            "lp_mint": str(self.lp_mint),
            "fee_account": str(self.fee_account),
            "pool_token_account": str(self.pool_token_account),
            "tx_signatures": list(self.tx_signatures),
        }


@dataclass
class SwapResult:
    """Outcome of a confirmed swap."""

    tx_signature: str
    amount_in: int
    minimum_amount_out: int
    slippage_protected: bool
    latency_ms: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tx_signature": self.tx_signature,
            "amount_in": self.amount_in,
            "minimum_amount_out": self.minimum_amount_out,
            "slippage_protected": self.slippage_protected,
            "latency_ms": self.latency_ms,
        }

    def __repr__(self) -> str:
        return (
            f"SwapResult({self.amount_in} in, min_out={self.minimum_amount_out}, "
            f"tx={self.tx_signature[:12]}...)"
        )
