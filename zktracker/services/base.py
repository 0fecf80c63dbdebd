# services/base.py
from typing import Awaitable, Type, TypeVar

from zktracker.utils.blockchain.types import RpcBinding
from zktracker.utils.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class TrackerError(Exception):
    """Base exception for tracker errors, `message` is shown to the user"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class MissingInput(TrackerError):
    """Raised when a required form field is empty."""
    pass


class InvalidAddress(TrackerError):
    """Raised when an address fails format validation."""
    pass


class DuplicateToken(TrackerError):
    """Raised when a token address is already tracked."""
    pass


class ContractQueryError(TrackerError):
    """Raised when a token contract accessor call fails."""
    pass


class QueryError(TrackerError):
    """Raised when a balance query fails."""
    pass


class WalletUnavailable(TrackerError):
    """Raised when no wallet provider is configured."""
    pass


class WalletConnectError(TrackerError):
    """Raised when the wallet refuses or fails to return accounts."""
    pass


class BaseService:
    def __init__(self, binding: RpcBinding):
        self.binding = binding

    async def _handle_rpc_operation(self, operation: Awaitable[T], error: Type[TrackerError]) -> T:
        """Await an RPC call, re-raising library failures as `error`."""
        try:
            return await operation
        except TrackerError:
            raise
        except Exception as e:
            logger.error(f"RPC operation error on {self.binding.rpc_url}: {str(e)}")
            raise error(str(e)) from e
