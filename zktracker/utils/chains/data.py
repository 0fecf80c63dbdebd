# utils/chains/data.py
from .types import Chain
from zktracker.utils.types import ChainId

# zkSync Era exposes its base token through the L2 base token system contract
L2_BASE_TOKEN_ADDRESS = "0x000000000000000000000000000000000000800A"

CHAIN_DATA_MAP = {
    ChainId.ETH: Chain(
        id=ChainId.ETH,
        name="Ethereum",
        rpc_url="https://eth.llamarpc.com",
    ),
    ChainId.SEPOLIA: Chain(
        id=ChainId.SEPOLIA,
        name="Sepolia",
        rpc_url="https://rpc.sepolia.org",
    ),
    ChainId.ZKSYNC: Chain(
        id=ChainId.ZKSYNC,
        name="zkSync Era",
        rpc_url="https://mainnet.era.zksync.io",
        settlement_chain_id=ChainId.ETH,
    ),
    ChainId.ZKSYNC_SEPOLIA: Chain(
        id=ChainId.ZKSYNC_SEPOLIA,
        name="zkSync Era Sepolia",
        rpc_url="https://sepolia.era.zksync.dev",
        settlement_chain_id=ChainId.SEPOLIA,
    ),
}
