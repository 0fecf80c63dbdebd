import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .routes import tracker
from .services.balances import BalanceAggregator
from .services.tracker import TrackerController
from .utils.blockchain.wallet import JsonRpcWalletProvider
from .utils.blockchain.zksync import ZkSyncRpcBinding
from .utils.chains.queries import get_chain_by_id, get_rpc_by_chain_id
from .utils.logging import get_logger

from .config import (
    DISCARD_STALE_REFRESH,
    ERC20_SCALE_DECIMALS,
    GZIP_MINIMUM_SIZE,
    HOST,
    PORT,
    SUCCESS_MESSAGE_TTL,
    TRACKER_CHAIN_ID,
    WALLET_RPC_URL,
)

logger = get_logger(__name__)


def build_tracker() -> TrackerController:
    chain = get_chain_by_id(TRACKER_CHAIN_ID)
    binding = ZkSyncRpcBinding(get_rpc_by_chain_id(chain.id))
    logger.info(f"Tracking balances on {chain.name} [{binding.rpc_url}]")
    wallet = JsonRpcWalletProvider(WALLET_RPC_URL) if WALLET_RPC_URL else None
    return TrackerController(
        binding,
        wallet=wallet,
        aggregator=BalanceAggregator(binding, erc20_scale_decimals=ERC20_SCALE_DECIMALS),
        success_ttl=SUCCESS_MESSAGE_TTL,
        discard_stale=DISCARD_STALE_REFRESH,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.tracker = build_tracker()
    # the RPC endpoint may be slow or down, serve requests meanwhile
    init_task = asyncio.create_task(app.state.tracker.initialize())
    yield
    if not init_task.done():
        init_task.cancel()
        try:
            await init_task
        except asyncio.CancelledError:
            logger.warning("Tracker initialization cancelled on shutdown")


app = FastAPI(lifespan=lifespan)

app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tracker.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
