"""
Summary prompt.

A single fixed instruction followed by the rendered order description.
There is no templating beyond that concatenation.
"""

SUMMARY_INSTRUCTION = (
    "Create the order summary for the customer in one or two complete sentences. "
    "Include order number, preference, address, pickup time. "
    "Use the following order details: "
)


def build_summary_prompt(order_description: str) -> str:
    return SUMMARY_INSTRUCTION + order_description
