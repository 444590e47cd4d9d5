"""
Order domain types.

OrderFacts is the only thing the summary path knows about an order. It is
built fresh from a stored record for a single request and then discarded.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Literal, Optional

SummarySource = Literal["ai", "fallback"]


class Preference(str, Enum):
    """How the customer wants to receive the order."""

    IN_STORE = "IN_STORE"
    DELIVERY = "DELIVERY"
    CURBSIDE = "CURBSIDE"

    @classmethod
    def values(cls) -> tuple:
        return tuple(p.value for p in cls)


@dataclass(frozen=True)
class OrderFacts:
    """Input to the order description builder."""

    id: int
    preference: Preference
    created_at: datetime
    address: Optional[str] = None
    pickup_time: Optional[datetime] = None


@dataclass(frozen=True)
class SummaryResult:
    """
    The only externally visible output of the summary path.

    summary is never empty and source is always set, whatever happened
    while generating it.
    """

    summary: str
    source: SummarySource

    def to_dict(self) -> Dict[str, str]:
        return {"summary": self.summary, "source": self.source}
