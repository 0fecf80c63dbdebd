"""
Tracker Test Configuration
==========================
Fake chain and wallet bindings shared by the test suite.

Nothing here talks to the network: the fakes answer from in-memory tables
and record every call they receive.
"""

import asyncio

import pytest
from eth_utils import is_address

from zktracker.services.registry import INITIAL_TOKENS, NATIVE_TOKEN_ADDRESS
from zktracker.utils.blockchain.evm import EvmRpcBinding


WALLET_A = "0x36615cf349d7f6344891b1e7ca7c72883f5dc049"
WALLET_B = "0xa61464658afeaf65cccaafd3a512b69a83b77618"
NEW_TOKEN = "0x5a7d6b2f92c77fad6ccabd7ee0624e64907eaf3e"
LLT_ADDRESS = INITIAL_TOKENS[1].address


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: pure logic tests with fake bindings")


class FakeRpcBinding:
    """In-memory stand-in for the zkSync RPC binding."""

    rpc_url = "http://fake-rpc.local"

    def __init__(self):
        self.native_balances = {}
        self.contracts = {}
        self.delays = {}
        self.calls = []
        self.addresses = {"mainContract": "0x32400084c286cf3e17e7b677ea9583e60a000324"}
        self.fail_contract_addresses = False
        self.call_delay = 0
        self.contract_addresses_delay = 0

    def add_contract(self, address, symbol, decimals=18, balances=None):
        self.contracts[address.lower()] = {
            "symbol": symbol,
            "decimals": decimals,
            "balances": {owner.lower(): amount for owner, amount in (balances or {}).items()},
        }

    def is_valid_address(self, address):
        return isinstance(address, str) and is_address(address)

    async def query_native_balance(self, address):
        self.calls.append(("getBalance", address))
        await asyncio.sleep(self.delays.get(address.lower(), 0))
        return self.native_balances.get(address.lower(), 0)

    async def contract_call(self, abi, address, method, args=()):
        self.calls.append((method, address, tuple(args)))
        await asyncio.sleep(self.call_delay)
        contract = self.contracts.get(address.lower())
        if contract is None:
            raise ValueError(f"execution reverted: no contract at {address}")
        if method == "balanceOf":
            return contract["balances"].get(args[0].lower(), 0)
        return contract[method]

    def smallest_unit_to_decimal(self, value, unit="ether"):
        return EvmRpcBinding.smallest_unit_to_decimal(self, value, unit)

    async def contract_addresses(self):
        await asyncio.sleep(self.contract_addresses_delay)
        if self.fail_contract_addresses:
            raise ConnectionError("connection refused")
        return dict(self.addresses)


class FakeWallet:
    def __init__(self, accounts=None, error=None):
        self.accounts = accounts if accounts is not None else [WALLET_A]
        self.error = error
        self.requests = 0

    async def request_accounts(self):
        self.requests += 1
        if self.error:
            raise self.error
        return list(self.accounts)


@pytest.fixture
def binding():
    """Binding where WALLET_A holds 1.5 ETH and 10 LLT, WALLET_B holds 2 ETH and 3 LLT."""
    fake = FakeRpcBinding()
    fake.native_balances = {
        WALLET_A: 1_500_000_000_000_000_000,
        WALLET_B: 2 * 10**18,
    }
    fake.add_contract(LLT_ADDRESS, "LLT", balances={WALLET_A: 10 * 10**18, WALLET_B: 3 * 10**18})
    fake.add_contract(NEW_TOKEN, "USDC", decimals=6, balances={WALLET_A: 2_500_000})
    return fake


@pytest.fixture
def wallet():
    return FakeWallet()


@pytest.fixture
def native_address():
    return NATIVE_TOKEN_ADDRESS
