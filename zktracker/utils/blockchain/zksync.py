from typing import Dict
import aiohttp
from aiocache import Cache, cached

from zktracker.config import CONTRACT_ADDRESSES_TTL, ZKSYNC_RPC_TIMEOUT
from zktracker.utils.logging import get_logger
from .evm import EvmRpcBinding, json_rpc_request

logger = get_logger(__name__)


class ZkSyncRpcBinding(EvmRpcBinding):
    """
    EVM binding extended with the zkSync Era `zks_*` RPC namespace.

    Standard calls (balances, eth_call) go through web3.py, the layer-2
    specific methods are sent as raw JSON-RPC requests.
    """

    def __init__(self, rpc_url: str, timeout: float = ZKSYNC_RPC_TIMEOUT):
        super().__init__(rpc_url)
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _zks_request(self, method: str, params: list = None):
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            return await json_rpc_request(session, self.rpc_url, method, params)

    @cached(
        ttl=CONTRACT_ADDRESSES_TTL,
        cache=Cache.MEMORY,
        key_builder=lambda f, self: f"contract_addresses:{self.rpc_url}",
    )
    async def contract_addresses(self) -> Dict[str, str]:
        """
        Fetch the L2 main contract and the bridge contract addresses

        Returns:
            Mapping of contract role to address
        """
        main_contract = await self._zks_request("zks_getMainContract")
        bridges = await self._zks_request("zks_getBridgeContracts")

        addresses = {"mainContract": main_contract}
        addresses.update({name: address for name, address in (bridges or {}).items() if address})
        logger.debug(f"Fetched {len(addresses)} L2 contract addresses from {self.rpc_url}")
        return addresses
