from typing import NamedTuple, Tuple, Union

from zktracker.models.schemas.tracker import Token
from zktracker.services.base import TrackerError


class RequestAccounts(NamedTuple):
    pass


class ResolveSymbol(NamedTuple):
    address: str


class FetchBalances(NamedTuple):
    target: str
    tokens: Tuple[Token, ...]
    generation: int


class Reject(NamedTuple):
    error: TrackerError


Effect = Union[RequestAccounts, ResolveSymbol, FetchBalances, Reject]
