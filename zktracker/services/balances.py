from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Dict, Iterable, Optional

from zktracker.models.schemas.tracker import Token
from zktracker.utils.blockchain.abi import ERC20_ABI
from zktracker.utils.blockchain.types import RpcBinding
from zktracker.utils.logging import get_logger

from .base import BaseService, InvalidAddress, MissingInput, QueryError
from .registry import NATIVE_TOKEN_ADDRESS

logger = get_logger(__name__)

NATIVE_UNIT = "ether"
DEFAULT_ERC20_SCALE_DECIMALS = 18
ERC20_DISPLAY_QUANTUM = Decimal("0.000001")


def validate_target_address(address: str, is_valid_address: Callable[[str], bool]) -> None:
    if not address:
        raise MissingInput("Please enter a wallet address to check")
    if not is_valid_address(address):
        raise InvalidAddress("Invalid wallet address")


def format_fixed(amount: str, quantum: Decimal = ERC20_DISPLAY_QUANTUM) -> str:
    with localcontext() as ctx:
        ctx.prec = 100
        return str(Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP))


class BalanceAggregator(BaseService):
    """
    Builds the balance map of a wallet over a list of tokens.

    The native asset is read with the native balance RPC and rendered as a
    plain decimal. ERC-20 balances are scaled by `erc20_scale_decimals` and
    rendered with six decimal places. The token's own `decimals()` is always
    read but only applied when `erc20_scale_decimals` is None.
    """

    def __init__(
        self,
        binding: RpcBinding,
        erc20_scale_decimals: Optional[int] = DEFAULT_ERC20_SCALE_DECIMALS,
        native_token_address: str = NATIVE_TOKEN_ADDRESS,
    ):
        super().__init__(binding)
        self.erc20_scale_decimals = erc20_scale_decimals
        self.native_token_address = native_token_address

    def is_native(self, token: Token) -> bool:
        return token.address.lower() == self.native_token_address.lower()

    async def _native_balance(self, target: str) -> str:
        raw = await self._handle_rpc_operation(
            self.binding.query_native_balance(target), QueryError
        )
        return self.binding.smallest_unit_to_decimal(raw, NATIVE_UNIT)

    async def _erc20_balance(self, target: str, token: Token) -> str:
        raw = await self._handle_rpc_operation(
            self.binding.contract_call(ERC20_ABI, token.address, "balanceOf", [target]),
            QueryError,
        )
        decimals = await self._handle_rpc_operation(
            self.binding.contract_call(ERC20_ABI, token.address, "decimals"),
            QueryError,
        )
        scale = int(decimals) if self.erc20_scale_decimals is None else self.erc20_scale_decimals
        if scale != int(decimals):
            logger.debug(f"{token.symbol} reports {decimals} decimals, scaling by {scale}")
        return format_fixed(self.binding.smallest_unit_to_decimal(int(raw), scale))

    async def refresh(self, target: str, tokens: Iterable[Token]) -> Dict[str, str]:
        """
        Query every token balance of `target`, one token at a time

        Args:
            target: Wallet address to query
            tokens: Tokens in display order

        Returns:
            Mapping of token address to decimal balance string

        Raises:
            MissingInput: target is empty
            InvalidAddress: target fails format validation
            QueryError: any balance call failed, no partial result is kept
        """
        validate_target_address(target, self.binding.is_valid_address)

        balances: Dict[str, str] = {}
        for token in tokens:
            if self.is_native(token):
                balances[token.address] = await self._native_balance(target)
            else:
                balances[token.address] = await self._erc20_balance(target, token)

        logger.info(f"Refreshed {len(balances)} balances for {target}")
        return balances
