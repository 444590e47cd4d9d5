"""
Observability sink for the summary path.

Tracing is strictly passive:
- Never influences the returned summary
- Never mutates state
- Failures are silent and non-fatal (callers wrap every call)

The default sink writes to the standard logging module. Tests inject a
NoOpTracer or a Mock.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class TraceMetadata:
    """Identity attached to every event of one summary request."""

    trace_id: str
    order_id: Optional[int] = None


class Tracer(ABC):
    """Abstract tracing interface."""

    @abstractmethod
    def record_event(self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata) -> None:
        """
        Record a point-in-time event.

        Args:
            name: Event name (e.g., "summary_prompt_built", "model_call_failed")
            metadata: Event data
            trace_metadata: Trace identity

        MUST NOT affect control flow.
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        pass


class NoOpTracer(Tracer):
    """Satisfies the Tracer interface but does nothing."""

    def record_event(self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata) -> None:
        pass

    def is_enabled(self) -> bool:
        return False


class LoggingTracer(Tracer):
    """Writes events to a logger. Credentials must never be put in metadata."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("ordering.summary")
        self.level = level

    def record_event(self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata) -> None:
        details = " ".join(f"{k}={v!r}" for k, v in metadata.items())
        self.logger.log(
            self.level,
            f"order summary: {name} trace_id={trace_metadata.trace_id} "
            f"order_id={trace_metadata.order_id} {details}".rstrip(),
        )

    def is_enabled(self) -> bool:
        return self.logger.isEnabledFor(self.level)
