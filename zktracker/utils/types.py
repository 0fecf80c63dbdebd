from enum import Enum


class ChainId(int, Enum):
    ETH = 1
    ZKSYNC = 324

    SEPOLIA = 11155111
    ZKSYNC_SEPOLIA = 300
