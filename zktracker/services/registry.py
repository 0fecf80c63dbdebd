from typing import Awaitable, Callable, Iterable, Iterator, Optional, Tuple

from zktracker.models.schemas.tracker import Token
from zktracker.utils.blockchain.abi import ERC20_ABI
from zktracker.utils.blockchain.types import RpcBinding
from zktracker.utils.chains.data import L2_BASE_TOKEN_ADDRESS
from zktracker.utils.logging import get_logger

from .base import BaseService, ContractQueryError, DuplicateToken, InvalidAddress, TrackerError

logger = get_logger(__name__)

NATIVE_TOKEN_ADDRESS = L2_BASE_TOKEN_ADDRESS

INITIAL_TOKENS: Tuple[Token, ...] = (
    Token(address=NATIVE_TOKEN_ADDRESS, symbol="ETH"),
    Token(address="0xF0067Dc3590b82ffBF6ADC156CD077dcCa9dD604", symbol="LLT"),
)

SymbolResolver = Callable[[str], Awaitable[str]]


def validate_token_address(address: str, is_valid_address: Callable[[str], bool]) -> None:
    if not address or not is_valid_address(address):
        raise InvalidAddress("Invalid token address")


def ensure_not_tracked(address: str, tokens: Iterable[Token]) -> None:
    if any(token.address.lower() == address.lower() for token in tokens):
        raise DuplicateToken(f"Token {address} is already tracked")


class TokenRegistry(BaseService):
    """Ordered, append-only list of tracked tokens."""

    def __init__(self, binding: RpcBinding, tokens: Optional[Iterable[Token]] = None):
        super().__init__(binding)
        self._tokens = list(INITIAL_TOKENS if tokens is None else tokens)

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return tuple(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __contains__(self, address: str) -> bool:
        return any(token.address.lower() == address.lower() for token in self._tokens)

    async def resolve_symbol(self, address: str) -> str:
        """Read `symbol()` from the token contract."""
        return await self._handle_rpc_operation(
            self.binding.contract_call(ERC20_ABI, address, "symbol"),
            ContractQueryError,
        )

    async def add(self, address: str, symbol_resolver: Optional[SymbolResolver] = None) -> Token:
        """
        Register a token contract

        Args:
            address: Token contract address
            symbol_resolver: Coroutine function returning the token symbol,
                defaults to the contract's `symbol()` accessor

        Raises:
            InvalidAddress: address fails format validation
            DuplicateToken: address is already tracked
            ContractQueryError: the symbol lookup failed
        """
        validate_token_address(address, self.binding.is_valid_address)
        ensure_not_tracked(address, self._tokens)

        resolver = symbol_resolver or self.resolve_symbol
        try:
            symbol = await resolver(address)
        except TrackerError:
            raise
        except Exception as e:
            raise ContractQueryError(str(e)) from e

        # another add may have landed while the symbol was resolving
        ensure_not_tracked(address, self._tokens)

        token = Token(address=address, symbol=str(symbol))
        self._tokens.append(token)
        logger.info(f"Tracking token {token.symbol} at {token.address}")
        return token
