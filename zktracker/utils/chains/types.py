from typing import Optional
from pydantic import BaseModel

from zktracker.utils.types import ChainId


class Chain(BaseModel):
    id: ChainId
    name: str
    rpc_url: str
    settlement_chain_id: Optional[ChainId] = None

    @property
    def is_layer2(self) -> bool:
        return self.settlement_chain_id is not None
