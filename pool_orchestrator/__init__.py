"""
Pool Orchestrator
=================
Provisioning and swap orchestration for SPL Token-Swap constant-product
pools on Solana.
"""

__version__ = "0.1.0"
