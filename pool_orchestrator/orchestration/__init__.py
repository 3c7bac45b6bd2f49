from pool_orchestrator.orchestration.provisioner import PoolProvisioner
from pool_orchestrator.orchestration.swapper import PoolSwapper, NO_SLIPPAGE_PROTECTION

__all__ = ["PoolProvisioner", "PoolSwapper", "NO_SLIPPAGE_PROTECTION"]
