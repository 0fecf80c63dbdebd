from decimal import Decimal, localcontext
from typing import Any, Dict, List, Optional, Sequence, Union
import aiohttp

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from eth_utils.address import to_checksum_address

from zktracker.utils.logging import get_logger

logger = get_logger(__name__)

HEADERS = {"accept": "application/json", "content-type": "application/json"}


class JsonRpcError(Exception):
    """Error object returned by a JSON-RPC endpoint"""
    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


async def json_rpc_request(
    session: aiohttp.ClientSession, url: str, method: str, params: Optional[list] = None
) -> Any:
    """
    Send a single JSON-RPC request and return its result

    Args:
        session: aiohttp client session
        url: The JSON-RPC endpoint
        method: The RPC method name
        params: Positional RPC parameters
    """
    payload = {
        "id": 1,
        "jsonrpc": "2.0",
        "method": method,
        "params": params or [],
    }

    async with session.post(url, json=payload, headers=HEADERS) as response:
        response.raise_for_status()
        data = await response.json()
        if "error" in data:
            error = data["error"]
            raise JsonRpcError(error.get("message", str(error)), code=error.get("code"))
        return data["result"]


class EvmRpcBinding:
    """web3.py backed access to an EVM JSON-RPC endpoint."""

    def __init__(self, rpc_url: str):
        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))

    def is_valid_address(self, address: str) -> bool:
        return isinstance(address, str) and Web3.is_address(address)

    async def query_native_balance(self, address: str) -> int:
        return await self.w3.eth.get_balance(to_checksum_address(address))

    async def contract_call(
        self, abi: List[Dict[str, Any]], address: str, method: str, args: Sequence[Any] = ()
    ) -> Any:
        contract = self.w3.eth.contract(address=to_checksum_address(address), abi=abi)
        # web3 rejects non-checksummed address arguments
        call_args = [
            to_checksum_address(arg) if isinstance(arg, str) and Web3.is_address(arg) else arg
            for arg in args
        ]
        logger.debug(f"eth_call {method}({call_args}) on {address}")
        return await getattr(contract.functions, method)(*call_args).call()

    def smallest_unit_to_decimal(self, value: int, unit: Union[str, int] = "ether") -> str:
        """
        Convert an integer amount in the smallest unit to a plain decimal string

        Args:
            value: Raw integer amount (e.g. wei)
            unit: A web3 unit name ("ether", "gwei", ...) or a number of decimals
        """
        if isinstance(unit, int):
            with localcontext() as ctx:
                ctx.prec = 100
                amount = Decimal(int(value)) / (Decimal(10) ** unit)
        else:
            amount = Decimal(Web3.from_wei(int(value), unit))

        with localcontext() as ctx:
            ctx.prec = 100
            return format(amount.normalize(), "f")

    async def contract_addresses(self) -> Dict[str, str]:
        raise NotImplementedError("Plain EVM endpoints expose no L2 system contracts")
