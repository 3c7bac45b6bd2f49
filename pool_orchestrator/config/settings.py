import os
from dotenv import load_dotenv

# Load Environment Variables from project root .env
env_path = os.path.join(os.path.dirname(__file__), "../../.env")
load_dotenv(env_path)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # ═══════════════════════════════════════════════════════════════════
    # POOL ORCHESTRATOR CONFIGURATION (Environment-Based)
    # ═══════════════════════════════════════════════════════════════════

    # --- Console ---
    SILENT_MODE = _env_bool("POOL_SILENT_MODE", False)

    # --- Network ---
    RPC_URL = os.getenv("RPC_URL", "https://api.devnet.solana.com")
    COMMITMENT = os.getenv("COMMITMENT", "confirmed")

    # --- Programs ---
    TOKEN_SWAP_PROGRAM_ID = os.getenv(
        "TOKEN_SWAP_PROGRAM_ID", "SwaPpA9LAaLfeLi3a68M4DjnLqgtticKg6CnyNwgAC8"
    )

    # --- Key Material ---
    # Identifiers resolve to <KEYS_DIR>/<name>.json (Solana CLI format)
    # or to an environment variable holding a base58 secret key.
    KEYS_DIR = os.path.abspath(os.getenv("KEYS_DIR", os.path.join(os.path.dirname(__file__), "../../keys")))
    PAYER_KEY = os.getenv("PAYER_KEY", "payer")
    POOL_STATE_KEY = os.getenv("POOL_STATE_KEY", "pool_state")
    POOL_TOKEN_ACCOUNT_KEY = os.getenv("POOL_TOKEN_ACCOUNT_KEY", "pool_token_account")

    # --- Fee Collection ---
    FEE_OWNER = os.getenv("FEE_OWNER", "HfoTxFR1Tm6kGmWgYWD6J7YHVy1UwqSULUGVLXkJqaKN")
