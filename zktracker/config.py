# config.py
import os
from typing import Optional
from dotenv import load_dotenv

from zktracker.utils.types import ChainId

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_scale(value: str) -> Optional[int]:
    """'token' applies each token's own decimals, anything else is a fixed decimal count."""
    if value.strip().lower() == "token":
        return None
    return int(value)


TRACKER_CHAIN_ID = ChainId(int(os.getenv("TRACKER_CHAIN_ID", ChainId.ZKSYNC_SEPOLIA.value)))
WALLET_RPC_URL = os.getenv("WALLET_RPC_URL")

ERC20_SCALE_DECIMALS = _as_scale(os.getenv("ERC20_SCALE_DECIMALS", "18"))
SUCCESS_MESSAGE_TTL = float(os.getenv("SUCCESS_MESSAGE_TTL", "3"))
DISCARD_STALE_REFRESH = _as_bool(os.getenv("DISCARD_STALE_REFRESH", "true"))
CONTRACT_ADDRESSES_TTL = int(os.getenv("CONTRACT_ADDRESSES_TTL", 60 * 60))
ZKSYNC_RPC_TIMEOUT = float(os.getenv("ZKSYNC_RPC_TIMEOUT", "10"))

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

GZIP_MINIMUM_SIZE = int(os.getenv("GZIP_MINIMUM_SIZE", 1000))
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 8000))
