from typing import Dict, List, NoReturn
from fastapi import APIRouter, Depends, HTTPException, status

from zktracker.dependencies import get_tracker
from zktracker.models.schemas.tracker import AddressRequest, Token, TrackerState, TrackerView
from zktracker.services.base import (
    ContractQueryError,
    DuplicateToken,
    InvalidAddress,
    MissingInput,
    QueryError,
    TrackerError,
    WalletConnectError,
    WalletUnavailable,
)
from zktracker.services.tracker import TrackerController
from zktracker.utils.logging import get_logger

logger = get_logger(__name__)


router = APIRouter(prefix="/tracker", tags=["tracker"])

ERROR_STATUS = {
    MissingInput: status.HTTP_400_BAD_REQUEST,
    InvalidAddress: status.HTTP_400_BAD_REQUEST,
    DuplicateToken: status.HTTP_409_CONFLICT,
    ContractQueryError: status.HTTP_502_BAD_GATEWAY,
    QueryError: status.HTTP_502_BAD_GATEWAY,
    WalletConnectError: status.HTTP_502_BAD_GATEWAY,
    WalletUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _raise_http(error: TrackerError) -> NoReturn:
    code = ERROR_STATUS.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=code, detail=error.message)


@router.get("/state", response_model=TrackerState)
async def get_state(tracker: TrackerController = Depends(get_tracker)):
    return tracker.state


@router.get("/view", response_model=TrackerView)
async def get_view(tracker: TrackerController = Depends(get_tracker)):
    """Rows of tracked tokens with their balances, empty until the first refresh."""
    return tracker.view()


@router.get("/tokens", response_model=List[Token])
async def get_tokens(tracker: TrackerController = Depends(get_tracker)):
    return list(tracker.state.tokens)


@router.post("/tokens", response_model=Token, status_code=status.HTTP_201_CREATED)
async def add_token(req: AddressRequest, tracker: TrackerController = Depends(get_tracker)):
    try:
        return await tracker.add_token(req.address)
    except TrackerError as e:
        _raise_http(e)


@router.post("/balances", response_model=Dict[str, str])
async def refresh_balances(req: AddressRequest, tracker: TrackerController = Depends(get_tracker)):
    """Query the balances of every tracked token for a wallet address."""
    try:
        return await tracker.refresh_balances(req.address)
    except TrackerError as e:
        _raise_http(e)


@router.post("/wallet/connect", response_model=TrackerState)
async def connect_wallet(tracker: TrackerController = Depends(get_tracker)):
    try:
        await tracker.connect_wallet()
    except TrackerError as e:
        _raise_http(e)
    return tracker.state


@router.get("/network", response_model=Dict[str, str])
async def get_network_contracts(tracker: TrackerController = Depends(get_tracker)):
    try:
        return await tracker.network_contracts()
    except Exception as e:
        logger.error(f"Failed to fetch L2 contract addresses: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to fetch L2 contract addresses")
