"""
Order description builder.

Turns OrderFacts into a deterministic, human-readable fact string, e.g.

    Order number: 7. Preference: IN STORE. Address: (none).
    Pickup time: (none). Creation date: 2025-01-01T00:00:00Z

(on one line). The summary prompt embeds this text, so the same facts must
always render byte-for-byte identically.
"""

from ordering.models import OrderFacts
from ordering.timestamps import to_rfc3339

NONE_PLACEHOLDER = "(none)"
SEGMENT_SEPARATOR = ". "


def build_order_description(facts: OrderFacts) -> str:
    """
    Render facts as number, preference, address, pickup time, creation date.

    Missing address or pickup time render as "(none)"; no field is ever
    omitted.
    """
    preference = getattr(facts.preference, "value", facts.preference)

    if facts.address and facts.address.strip():
        address = facts.address
    else:
        address = NONE_PLACEHOLDER

    if facts.pickup_time is not None:
        pickup_time = to_rfc3339(facts.pickup_time)
    else:
        pickup_time = NONE_PLACEHOLDER

    segments = [
        f"Order number: {facts.id}",
        f"Preference: {str(preference).replace('_', ' ')}",
        f"Address: {address}",
        f"Pickup time: {pickup_time}",
        f"Creation date: {to_rfc3339(facts.created_at)}",
    ]
    return SEGMENT_SEPARATOR.join(segments)
