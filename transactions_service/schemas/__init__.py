"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt

WalletRefField = Union[int, str]


class TokenPayload(BaseModel):
    """Identity carried inside the ``payload`` claim of access tokens."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    iin: str = ""
    username: str = ""
    role: str = Field(default="", validation_alias=AliasChoices("payload", "role"))


class TransferResponse(BaseModel):
    id: int
    amount: int
    from_wallet_id: int
    to_wallet_id: int
    to_wallet_code: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletResponse(BaseModel):
    id: int
    owner: int
    code: str
    created_at: Optional[datetime] = None
    balance: int
    transfers: list[TransferResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class WalletListResponse(BaseModel):
    total: int
    wallets: list[WalletResponse]


class ReplenishRequest(BaseModel):
    wallet_id: WalletRefField
    amount: StrictInt


class TransferRequest(BaseModel):
    from_wallet_id: WalletRefField
    to_wallet_id: WalletRefField
    amount: StrictInt


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
