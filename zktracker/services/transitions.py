"""
Pure state transitions of a tracker session.

Every function takes the current `TrackerState` and returns the next state,
`begin_*` transitions also return the effect the controller has to run.
Nothing here touches the network.
"""
from typing import Callable, Dict, List, Tuple

from zktracker.models.effects import Effect, FetchBalances, Reject, RequestAccounts, ResolveSymbol
from zktracker.models.schemas.tracker import Token, TrackerState

from .balances import validate_target_address
from .base import DuplicateToken, TrackerError, WalletConnectError, WalletUnavailable
from .registry import ensure_not_tracked, validate_token_address

WALLET_CONNECTED = "Wallet connected successfully!"
TOKEN_ADDED = "Token added successfully!"
BALANCES_REFRESHED = "Balances refreshed successfully!"
WALLET_MISSING = "No wallet provider configured. Set WALLET_RPC_URL to connect your wallet."

AddressValidator = Callable[[str], bool]


def _reject(state: TrackerState, error: TrackerError) -> Tuple[TrackerState, Effect]:
    return state.model_copy(update={"error": error.message}), Reject(error)


def fail_initialize(state: TrackerState, error: Exception) -> TrackerState:
    return state.model_copy(update={"error": f"Failed to initialize Web3: {error}"})


def begin_connect(state: TrackerState, wallet_available: bool) -> Tuple[TrackerState, Effect]:
    state = state.model_copy(update={"error": None})
    if not wallet_available:
        return _reject(state, WalletUnavailable(WALLET_MISSING))
    return state, RequestAccounts()


def complete_connect(state: TrackerState, accounts: List[str]) -> TrackerState:
    if not accounts:
        raise WalletConnectError("Wallet returned no accounts")
    return state.model_copy(update={"account": accounts[0], "success": WALLET_CONNECTED})


def fail_connect(state: TrackerState, error: TrackerError) -> TrackerState:
    return state.model_copy(update={"error": f"Failed to connect wallet: {error.message}"})


def begin_add_token(
    state: TrackerState, address: str, is_valid_address: AddressValidator
) -> Tuple[TrackerState, Effect]:
    state = state.model_copy(update={"error": None, "new_token_address": address})
    try:
        validate_token_address(address, is_valid_address)
        ensure_not_tracked(address, state.tokens)
    except TrackerError as e:
        return _reject(state, e)
    return state, ResolveSymbol(address)


def complete_add_token(state: TrackerState, token: Token) -> TrackerState:
    return state.model_copy(update={
        "tokens": state.tokens + (token,),
        "new_token_address": "",
        "success": TOKEN_ADDED,
    })


def fail_add_token(state: TrackerState, error: TrackerError) -> TrackerState:
    if isinstance(error, DuplicateToken):
        return state.model_copy(update={"error": error.message})
    return state.model_copy(update={"error": f"Error adding token: {error.message}"})


def begin_refresh(
    state: TrackerState, address: str, is_valid_address: AddressValidator
) -> Tuple[TrackerState, Effect]:
    state = state.model_copy(update={"wallet_to_check": address})
    try:
        validate_target_address(address, is_valid_address)
    except TrackerError as e:
        return _reject(state, e)

    generation = state.generation + 1
    state = state.model_copy(update={"loading": True, "error": None, "generation": generation})
    return state, FetchBalances(target=address, tokens=state.tokens, generation=generation)


def is_stale(state: TrackerState, generation: int) -> bool:
    return generation != state.generation


def complete_refresh(
    state: TrackerState, generation: int, balances: Dict[str, str], discard_stale: bool = True
) -> TrackerState:
    """Replace the balance map, unless a newer refresh has started and stale results are discarded."""
    if discard_stale and is_stale(state, generation):
        return state
    return state.model_copy(update={
        "balances": dict(balances),
        "loading": False,
        "success": BALANCES_REFRESHED,
    })


def fail_refresh(
    state: TrackerState, generation: int, error: TrackerError, discard_stale: bool = True
) -> TrackerState:
    if discard_stale and is_stale(state, generation):
        return state
    return state.model_copy(update={
        "loading": False,
        "error": f"Error refreshing balances: {error.message}",
    })


def clear_success(state: TrackerState, message: str) -> TrackerState:
    if state.success != message:
        return state
    return state.model_copy(update={"success": None})
