from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = Field(examples=["0xF0067Dc3590b82ffBF6ADC156CD077dcCa9dD604"])
    symbol: str = Field(examples=["LLT"])


class TrackerState(BaseModel):
    """Application state of one tracker session.

    Instances are immutable, transitions return updated copies.
    """
    model_config = ConfigDict(frozen=True)

    account: Optional[str] = Field(default=None, description="Connected wallet account")
    tokens: Tuple[Token, ...] = Field(default=(), description="Tracked tokens in display order")
    balances: Dict[str, str] = Field(
        default_factory=dict,
        description="Token address to decimal balance of the last refresh",
    )
    new_token_address: str = ""
    wallet_to_check: str = ""
    loading: bool = False
    error: Optional[str] = None
    success: Optional[str] = None
    generation: int = Field(default=0, description="Number of refreshes started")

    def to_view(self) -> "TrackerView":
        rows = []
        if self.balances:
            rows = [
                TokenRow(
                    address=token.address,
                    symbol=token.symbol,
                    balance=self.balances.get(token.address, "0"),
                )
                for token in self.tokens
            ]
        return TrackerView(
            account=self.account,
            loading=self.loading,
            error=self.error,
            success=self.success,
            rows=rows,
        )


class TokenRow(BaseModel):
    address: str
    symbol: str = Field(examples=["ETH"])
    balance: str = Field(examples=["1.5"])


class TrackerView(BaseModel):
    account: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    success: Optional[str] = None
    rows: List[TokenRow] = Field(default_factory=list)


class AddressRequest(BaseModel):
    address: str = Field(default="", examples=["0x36615Cf349d7F6344891B1e7CA7C72883F5dc049"])
