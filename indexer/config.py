import os
from dotenv import load_dotenv

# always load from local file
load_dotenv(".env")

def required(name):
    value = os.getenv(name)
    if not value:
        raise SystemExit(f"Missing {name} in .env")
    return value

# -------- env / config --------
GODWOKEN_RPC_URL  = required("GODWOKEN_RPC_URL")
DB_PATH           = os.getenv("DB_PATH", "godwoken_index.sqlite")
POLL_INTERVAL     = float(os.getenv("POLL_INTERVAL", "3"))
LOG_LEVEL         = os.getenv("LOG_LEVEL", "INFO").upper()

# --- rollup identifiers, forwarded as-is to the store ---
L2_SUDT_TYPE_SCRIPT_HASH   = required("L2_SUDT_TYPE_SCRIPT_HASH")
POLYJUICE_TYPE_SCRIPT_HASH = required("POLYJUICE_TYPE_SCRIPT_HASH")
ROLLUP_TYPE_HASH           = required("ROLLUP_TYPE_HASH")
ETH_ACCOUNT_LOCK_HASH      = required("ETH_ACCOUNT_LOCK_HASH")
TRON_ACCOUNT_LOCK_HASH     = os.getenv("TRON_ACCOUNT_LOCK_HASH") or None

ROLLUP_IDENTIFIERS = {
    "l2_sudt_type_script_hash":   L2_SUDT_TYPE_SCRIPT_HASH,
    "polyjuice_type_script_hash": POLYJUICE_TYPE_SCRIPT_HASH,
    "rollup_type_hash":           ROLLUP_TYPE_HASH,
    "eth_account_lock_hash":      ETH_ACCOUNT_LOCK_HASH,
    "tron_account_lock_hash":     TRON_ACCOUNT_LOCK_HASH,
}
