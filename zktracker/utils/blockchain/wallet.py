from typing import List
import aiohttp

from zktracker.utils.logging import get_logger
from .evm import json_rpc_request

logger = get_logger(__name__)


class JsonRpcWalletProvider:
    """
    Wallet reachable over JSON-RPC (e.g. a desktop wallet's local endpoint).

    `eth_requestAccounts` may prompt the wallet owner to approve the connection.
    """

    def __init__(self, rpc_url: str, timeout: float = 120):
        self.rpc_url = rpc_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def request_accounts(self) -> List[str]:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            accounts = await json_rpc_request(session, self.rpc_url, "eth_requestAccounts")
        logger.debug(f"Wallet at {self.rpc_url} returned {len(accounts or [])} accounts")
        return list(accounts or [])
