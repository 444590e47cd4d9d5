"""
Order input validation.

Rules:
- preference must be IN_STORE, DELIVERY or CURBSIDE
- DELIVERY and CURBSIDE need a non-blank address
- anything but IN_STORE needs an RFC 3339 pickup_time in the future

The error messages are returned to API clients verbatim.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ordering.models import Preference
from ordering.timestamps import parse_rfc3339, utc_now


class OrderValidationError(ValueError):
    """Order input rejected; str(error) is the client-facing message."""
    pass


@dataclass(frozen=True)
class OrderInput:
    """Validated order fields, ready to store."""

    preference: Preference
    address: Optional[str] = None
    pickup_time: Optional[datetime] = None


def validate_order(
    preference: Optional[str],
    address: Optional[str] = None,
    pickup_time: Optional[str] = None,
    now: Optional[datetime] = None,
) -> OrderInput:
    """
    Validate raw order fields.

    An IN_STORE order may still carry an address or pickup time; they are
    kept as given (a pickup time is only parsed, not required to be future).

    Raises:
        OrderValidationError: with the message to show the client
    """
    if preference not in Preference.values():
        raise OrderValidationError("preference must be IN_STORE, DELIVERY, or CURBSIDE")
    pref = Preference(preference)

    if pref in (Preference.DELIVERY, Preference.CURBSIDE):
        if address is None or not address.strip():
            raise OrderValidationError("address required for DELIVERY and CURBSIDE")

    parsed_pickup: Optional[datetime] = None
    if pref != Preference.IN_STORE:
        if not pickup_time:
            raise OrderValidationError("pickup_time required when not IN_STORE")
        try:
            parsed_pickup = parse_rfc3339(pickup_time)
        except ValueError:
            raise OrderValidationError("pickup_time must be RFC3339")
        if parsed_pickup <= (now or utc_now()):
            raise OrderValidationError("pickup_time must be in the future")
    elif pickup_time:
        try:
            parsed_pickup = parse_rfc3339(pickup_time)
        except ValueError:
            raise OrderValidationError("pickup_time must be RFC3339")

    return OrderInput(preference=pref, address=address, pickup_time=parsed_pickup)
