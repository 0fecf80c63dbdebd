from typing import Any, Dict, List, Protocol, Sequence, Union


class RpcBinding(Protocol):
    """Chain access used by the tracker services."""

    rpc_url: str

    def is_valid_address(self, address: str) -> bool: ...

    async def query_native_balance(self, address: str) -> int: ...

    async def contract_call(
        self, abi: List[Dict[str, Any]], address: str, method: str, args: Sequence[Any] = ()
    ) -> Any: ...

    def smallest_unit_to_decimal(self, value: int, unit: Union[str, int] = "ether") -> str: ...

    async def contract_addresses(self) -> Dict[str, str]: ...


class WalletProvider(Protocol):
    """Account provider, the server-side stand-in for an injected browser wallet."""

    async def request_accounts(self) -> List[str]: ...
