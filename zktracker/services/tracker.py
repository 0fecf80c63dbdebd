import asyncio
from typing import Dict, Optional

from zktracker.models.effects import FetchBalances, Reject, ResolveSymbol
from zktracker.models.schemas.tracker import Token, TrackerState, TrackerView
from zktracker.utils.blockchain.types import RpcBinding, WalletProvider
from zktracker.utils.logging import get_logger

from . import transitions
from .balances import BalanceAggregator
from .base import TrackerError, WalletConnectError
from .registry import TokenRegistry

logger = get_logger(__name__)


class TrackerController:
    """
    Owns the session state and runs the effects requested by transitions.

    One controller serves one tracker session. The RPC binding and the
    wallet provider are injected so they can be swapped for fakes.
    """

    def __init__(
        self,
        binding: RpcBinding,
        wallet: Optional[WalletProvider] = None,
        registry: Optional[TokenRegistry] = None,
        aggregator: Optional[BalanceAggregator] = None,
        success_ttl: float = 3.0,
        discard_stale: bool = True,
    ):
        self.binding = binding
        self.wallet = wallet
        self.registry = registry or TokenRegistry(binding)
        self.aggregator = aggregator or BalanceAggregator(binding)
        self.success_ttl = success_ttl
        self.discard_stale = discard_stale
        self.state = TrackerState(tokens=self.registry.tokens)
        self._success_timer: Optional[asyncio.TimerHandle] = None

    def view(self) -> TrackerView:
        return self.state.to_view()

    def _announce(self):
        """Schedule the auto-clear of the success message just set."""
        message = self.state.success
        if not message:
            return
        if self._success_timer:
            self._success_timer.cancel()
        loop = asyncio.get_running_loop()
        self._success_timer = loop.call_later(self.success_ttl, self._clear_success, message)

    def _clear_success(self, message: str):
        self.state = transitions.clear_success(self.state, message)
        self._success_timer = None

    async def initialize(self):
        logger.info(f"Connecting to zkSync Era [{self.binding.rpc_url}]")
        try:
            addresses = await self.binding.contract_addresses()
            logger.info(f"L2 contract addresses: {addresses}")
        except Exception as e:
            logger.error(f"Failed to initialize Web3: {str(e)}")
            self.state = transitions.fail_initialize(self.state, e)

    async def network_contracts(self) -> Dict[str, str]:
        return await self.binding.contract_addresses()

    async def connect_wallet(self) -> str:
        """Ask the wallet for its accounts and keep the first one."""
        self.state, effect = transitions.begin_connect(self.state, self.wallet is not None)
        if isinstance(effect, Reject):
            logger.warning(effect.error.message)
            raise effect.error
        try:
            try:
                accounts = await self.wallet.request_accounts()
            except Exception as e:
                raise WalletConnectError(str(e)) from e
            self.state = transitions.complete_connect(self.state, accounts)
        except TrackerError as e:
            logger.error(f"Failed to connect wallet: {e.message}")
            self.state = transitions.fail_connect(self.state, e)
            raise

        logger.info(f"Connected account {self.state.account}")
        self._announce()
        return self.state.account

    async def add_token(self, address: str) -> Token:
        self.state, effect = transitions.begin_add_token(
            self.state, address, self.binding.is_valid_address
        )
        if isinstance(effect, Reject):
            raise effect.error

        if not isinstance(effect, ResolveSymbol):
            raise TypeError(f"Unexpected effect {effect!r}")
        try:
            token = await self.registry.add(effect.address)
        except TrackerError as e:
            logger.error(f"Error adding token {address}: {e.message}")
            self.state = transitions.fail_add_token(self.state, e)
            raise

        self.state = transitions.complete_add_token(self.state, token)
        self._announce()
        return token

    async def refresh_balances(self, address: str) -> Dict[str, str]:
        """
        Refresh the balance map for `address`

        The caller always receives its own result, but the session state only
        takes it while it belongs to the latest refresh (unless stale results
        are kept, in which case the last one to resolve wins).
        """
        self.state, effect = transitions.begin_refresh(
            self.state, address, self.binding.is_valid_address
        )
        if isinstance(effect, Reject):
            raise effect.error

        if not isinstance(effect, FetchBalances):
            raise TypeError(f"Unexpected effect {effect!r}")
        try:
            balances = await self.aggregator.refresh(effect.target, effect.tokens)
        except TrackerError as e:
            logger.error(f"Error refreshing balances for {address}: {e.message}")
            self.state = transitions.fail_refresh(
                self.state, effect.generation, e, self.discard_stale
            )
            raise

        stale = self.discard_stale and transitions.is_stale(self.state, effect.generation)
        self.state = transitions.complete_refresh(
            self.state, effect.generation, balances, self.discard_stale
        )
        if stale:
            logger.debug(f"Discarding balances of stale refresh #{effect.generation} for {address}")
        else:
            self._announce()
        return balances
