"""
Chain Binding Tests
===================
web3.py binding, zks_* extension and wallet provider with mocked transports.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from eth_utils import to_checksum_address

from conftest import NEW_TOKEN, WALLET_A
from zktracker.config import ZKSYNC_RPC_TIMEOUT
from zktracker.utils.blockchain.abi import ERC20_ABI
from zktracker.utils.blockchain.evm import EvmRpcBinding, JsonRpcError, json_rpc_request
from zktracker.utils.blockchain.wallet import JsonRpcWalletProvider
from zktracker.utils.blockchain.zksync import ZkSyncRpcBinding


def _session_returning(payload):
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json = AsyncMock(return_value=payload)

    session = MagicMock()
    session.post.return_value.__aenter__ = AsyncMock(return_value=response)
    session.post.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.mark.unit
class TestEvmRpcBinding:
    def test_is_valid_address(self):
        binding = EvmRpcBinding("http://localhost:8545")

        assert binding.is_valid_address(WALLET_A)
        assert binding.is_valid_address(to_checksum_address(WALLET_A))
        assert not binding.is_valid_address("not-an-address")
        assert not binding.is_valid_address("")
        assert not binding.is_valid_address(None)

    @pytest.mark.parametrize("value, unit, expected", [
        (1_500_000_000_000_000_000, "ether", "1.5"),
        (10**18, "ether", "1"),
        (0, "ether", "0"),
        (1, "ether", "0.000000000000000001"),
        (123 * 10**18, "ether", "123"),
        (2_500_000, 6, "2.5"),
        (10, 18, "0.00000000000000001"),
    ])
    def test_smallest_unit_to_decimal(self, value, unit, expected):
        binding = EvmRpcBinding("http://localhost:8545")
        assert binding.smallest_unit_to_decimal(value, unit) == expected

    @pytest.mark.asyncio
    async def test_contract_call_checksums_address_arguments(self):
        binding = EvmRpcBinding("http://localhost:8545")
        contract = MagicMock()
        contract.functions.balanceOf.return_value.call = AsyncMock(return_value=42)
        binding.w3 = MagicMock()
        binding.w3.eth.contract.return_value = contract

        result = await binding.contract_call(ERC20_ABI, NEW_TOKEN, "balanceOf", [WALLET_A])

        assert result == 42
        binding.w3.eth.contract.assert_called_once_with(address=to_checksum_address(NEW_TOKEN), abi=ERC20_ABI)
        contract.functions.balanceOf.assert_called_once_with(to_checksum_address(WALLET_A))

    @pytest.mark.asyncio
    async def test_query_native_balance(self):
        binding = EvmRpcBinding("http://localhost:8545")
        binding.w3 = MagicMock()
        binding.w3.eth.get_balance = AsyncMock(return_value=7)

        assert await binding.query_native_balance(WALLET_A) == 7
        binding.w3.eth.get_balance.assert_awaited_once_with(to_checksum_address(WALLET_A))

    @pytest.mark.asyncio
    async def test_plain_endpoint_has_no_l2_contracts(self):
        binding = EvmRpcBinding("http://localhost:8545")

        with pytest.raises(NotImplementedError):
            await binding.contract_addresses()


@pytest.mark.unit
class TestJsonRpcRequest:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        session = _session_returning({"jsonrpc": "2.0", "id": 1, "result": [WALLET_A]})

        result = await json_rpc_request(session, "http://wallet", "eth_requestAccounts")

        assert result == [WALLET_A]
        payload = session.post.call_args.kwargs["json"]
        assert payload["method"] == "eth_requestAccounts"
        assert payload["params"] == []

    @pytest.mark.asyncio
    async def test_error_object_raises(self):
        session = _session_returning({"jsonrpc": "2.0", "id": 1, "error": {"code": 4001, "message": "User rejected the request."}})

        with pytest.raises(JsonRpcError) as exc_info:
            await json_rpc_request(session, "http://wallet", "eth_requestAccounts")

        assert exc_info.value.code == 4001
        assert exc_info.value.message == "User rejected the request."


@pytest.mark.unit
class TestZkSyncRpcBinding:
    def test_requests_have_a_timeout(self):
        assert ZkSyncRpcBinding("http://zksync-timeout.local").timeout.total == ZKSYNC_RPC_TIMEOUT
        assert ZkSyncRpcBinding("http://zksync-timeout.local", timeout=2.5).timeout.total == 2.5

    @pytest.mark.asyncio
    async def test_contract_addresses_merges_main_and_bridges(self):
        binding = ZkSyncRpcBinding("http://zksync-merge.local")
        bridges = {
            "l1Erc20DefaultBridge": "0x57891966931eb4bb6fb81430e6ce0a03aabde063",
            "l2Erc20DefaultBridge": "0x11f943b2c77b743ab90f4a0ae7d5a4e7fca3e102",
            "l1WethBridge": None,
        }
        request = AsyncMock(side_effect=["0x32400084c286cf3e17e7b677ea9583e60a000324", bridges])

        with patch.object(binding, "_zks_request", request):
            addresses = await binding.contract_addresses()

        assert addresses["mainContract"] == "0x32400084c286cf3e17e7b677ea9583e60a000324"
        assert addresses["l2Erc20DefaultBridge"] == bridges["l2Erc20DefaultBridge"]
        assert "l1WethBridge" not in addresses
        assert [c.args[0] for c in request.await_args_list] == ["zks_getMainContract", "zks_getBridgeContracts"]

    @pytest.mark.asyncio
    async def test_contract_addresses_are_memoised(self):
        binding = ZkSyncRpcBinding("http://zksync-cache.local")
        request = AsyncMock(side_effect=["0x32400084c286cf3e17e7b677ea9583e60a000324", {}])

        with patch.object(binding, "_zks_request", request):
            first = await binding.contract_addresses()
            second = await binding.contract_addresses()

        assert first == second
        assert request.await_count == 2


@pytest.mark.unit
class TestJsonRpcWalletProvider:
    @pytest.mark.asyncio
    async def test_request_accounts(self):
        provider = JsonRpcWalletProvider("http://127.0.0.1:1248")

        with patch("zktracker.utils.blockchain.wallet.json_rpc_request", AsyncMock(return_value=[WALLET_A])) as request:
            accounts = await provider.request_accounts()

        assert accounts == [WALLET_A]
        assert request.await_args.args[1:] == ("http://127.0.0.1:1248", "eth_requestAccounts")
