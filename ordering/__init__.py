"""
Order domain and summary generation.

Clean interface for the HTTP layer to import order components.
"""

from ordering.models import OrderFacts, Preference, SummaryResult, SummarySource
from ordering.description import build_order_description
from ordering.prompting import SUMMARY_INSTRUCTION, build_summary_prompt
from ordering.validation import OrderInput, OrderValidationError, validate_order
from ordering.tracing import LoggingTracer, NoOpTracer, TraceMetadata, Tracer
from ordering.summary import (
    FALLBACK_SUMMARY_TEXT,
    ProviderChoice,
    SummaryOrchestrator,
    produce_summary,
    select_provider,
)

__all__ = [
    "OrderFacts",
    "Preference",
    "SummaryResult",
    "SummarySource",
    "build_order_description",
    "SUMMARY_INSTRUCTION",
    "build_summary_prompt",
    "OrderInput",
    "OrderValidationError",
    "validate_order",
    "LoggingTracer",
    "NoOpTracer",
    "TraceMetadata",
    "Tracer",
    "FALLBACK_SUMMARY_TEXT",
    "ProviderChoice",
    "SummaryOrchestrator",
    "produce_summary",
    "select_provider",
]
