import os
from .types import Chain
from .data import CHAIN_DATA_MAP
from zktracker.utils.types import ChainId


def get_chain_by_id(chain_id: ChainId) -> Chain:
    """Get chain data by its ID."""
    chain = CHAIN_DATA_MAP.get(chain_id)
    if chain is None:
        raise ValueError(f"Chain {chain_id} not found")
    return chain


def get_rpc_by_chain_id(chain_id: ChainId) -> str:
    """Get RPC URL by chain ID.

    ZKSYNC_RPC_URL overrides the public endpoint of layer-2 chains.
    """
    chain = get_chain_by_id(chain_id)

    if chain.is_layer2:
        ZKSYNC_RPC_URL = os.getenv("ZKSYNC_RPC_URL")
        if ZKSYNC_RPC_URL:
            return ZKSYNC_RPC_URL
    return chain.rpc_url
