from pool_orchestrator.config.settings import Settings
from pool_orchestrator.config.pool_config import (
    CurveType,
    FeeSchedule,
    PoolConfig,
    DEFAULT_POOL_CONFIG,
)

__all__ = ["Settings", "CurveType", "FeeSchedule", "PoolConfig", "DEFAULT_POOL_CONFIG"]
