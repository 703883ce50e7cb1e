"""
Centralized configuration for the economy plugin.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


DB_PATH = os.getenv("ECONOMY_DB_PATH", os.path.join("plugins", "Economy", "database.db"))
LOG_LEVEL = os.getenv("ECONOMY_LOG_LEVEL", "INFO").upper()

# Display settings for the command layer
CURRENCY_SYMBOL = os.getenv("ECONOMY_CURRENCY_SYMBOL", "$")
BALANCETOP_PAGE_SIZE = _parse_int("ECONOMY_BALANCETOP_PAGE_SIZE", 10)

# Create a main account for players on their first join
AUTO_CREATE_MAIN_ACCOUNT = _parse_bool("ECONOMY_AUTO_CREATE_MAIN_ACCOUNT", True)

# Largest balance the store can hold in an INTEGER column (minor units)
MAX_BALANCE = 2**63 - 1

# Suggested amounts offered by tab completion
COMPLETION_AMOUNTS = ["100", "1000", "10000"]
