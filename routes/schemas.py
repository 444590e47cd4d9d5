"""
Request/response bodies for the HTTP API.
"""

from typing import Literal, Optional

from pydantic import BaseModel

from ordering.timestamps import to_rfc3339
from storage.types import OrderRecord


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    token: str


class MeResponse(BaseModel):
    id: int
    email: str


class OrderRequest(BaseModel):
    # Validated by ordering.validation so the client gets the domain message
    preference: str = ""
    address: Optional[str] = None
    pickup_time: Optional[str] = None


class OrderResponse(BaseModel):
    id: int
    user_id: int
    preference: str
    address: Optional[str] = None
    pickup_time: Optional[str] = None
    created_at: str

    @classmethod
    def from_record(cls, record: OrderRecord) -> "OrderResponse":
        return cls(
            id=record.id,
            user_id=record.user_id,
            preference=record.preference.value,
            address=record.address,
            pickup_time=to_rfc3339(record.pickup_time) if record.pickup_time else None,
            created_at=to_rfc3339(record.created_at),
        )


class OrderSummaryResponse(BaseModel):
    summary: str
    source: Literal["ai", "fallback"]
