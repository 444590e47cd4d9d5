"""
Storage record types.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ordering.models import OrderFacts, Preference


@dataclass(frozen=True)
class UserRecord:
    id: int
    email: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class OrderRecord:
    id: int
    user_id: int
    preference: Preference
    created_at: datetime
    address: Optional[str] = None
    pickup_time: Optional[datetime] = None

    def to_facts(self) -> OrderFacts:
        return OrderFacts(
            id=self.id,
            preference=self.preference,
            address=self.address,
            pickup_time=self.pickup_time,
            created_at=self.created_at,
        )
