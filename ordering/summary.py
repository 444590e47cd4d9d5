"""
Order Summary Orchestrator
==========================

Single entry point for turning an order into a customer-facing summary.

Flow:
  OrderFacts -> description -> prompt -> (0 or 1 provider call) -> SummaryResult

Provider policy (fixed precedence, evaluated per request):
  1. OPENAI_API_KEY non-blank  -> OpenAI only
  2. else GEMINI_API_KEY non-blank -> Gemini only
  3. else no call

Invariants:
- produce_summary never raises for anything related to generation
- the result is always well-formed: non-empty summary, source set
- at most one provider call per request; a failed OpenAI call never falls
  through to Gemini, it goes straight to the fallback text
- credentials are read fresh on every request and never logged
- tracer failures are swallowed and cannot change the result
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from config import ProviderCredentials
from inference import GeminiBackend, ModelBackend, ModelRequest, OpenAIChatBackend
from ordering.description import build_order_description
from ordering.models import OrderFacts, SummaryResult
from ordering.prompting import build_summary_prompt
from ordering.tracing import LoggingTracer, TraceMetadata, Tracer

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY_TEXT = "Unable to generate Summary"

PROVIDER_OPENAI = "openai"
PROVIDER_GEMINI = "gemini"


@dataclass(frozen=True)
class ProviderChoice:
    provider: str
    api_key: str
    model: Optional[str] = None


def select_provider(credentials: ProviderCredentials) -> Optional[ProviderChoice]:
    """Pure precedence check: OpenAI, then Gemini, then nothing."""
    if credentials.openai_api_key and credentials.openai_api_key.strip():
        return ProviderChoice(PROVIDER_OPENAI, credentials.openai_api_key, credentials.openai_model)
    if credentials.gemini_api_key and credentials.gemini_api_key.strip():
        return ProviderChoice(PROVIDER_GEMINI, credentials.gemini_api_key, credentials.gemini_model)
    return None


def default_backends() -> Dict[str, ModelBackend]:
    return {
        PROVIDER_OPENAI: OpenAIChatBackend(),
        PROVIDER_GEMINI: GeminiBackend(),
    }


def fallback_result() -> SummaryResult:
    return SummaryResult(summary=FALLBACK_SUMMARY_TEXT, source="fallback")


class SummaryOrchestrator:
    """
    Fault-tolerant facade over the two providers.

    Holds no per-request state, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        backends: Optional[Dict[str, ModelBackend]] = None,
        credentials_loader: Optional[Callable[[], ProviderCredentials]] = None,
        tracer: Optional[Tracer] = None,
    ):
        """
        Args:
            backends: provider name -> ModelBackend (defaults to the real HTTP backends)
            credentials_loader: called once per request (defaults to reading the environment)
            tracer: observability sink (defaults to logging)
        """
        self.backends = backends if backends is not None else default_backends()
        self.credentials_loader = credentials_loader or ProviderCredentials.from_env
        self.tracer = tracer or LoggingTracer()

    def produce_summary(self, facts: OrderFacts, trace_id: Optional[str] = None) -> SummaryResult:
        trace = TraceMetadata(trace_id=trace_id or str(uuid.uuid4()), order_id=facts.id)
        prompt = build_summary_prompt(build_order_description(facts))

        choice = select_provider(self.credentials_loader())
        if choice is None:
            self._record("model_call_skipped", {"reason": "no_credentials"}, trace)
            return fallback_result()

        backend = self.backends.get(choice.provider)
        if backend is None:
            self._record("model_call_skipped", {"reason": "backend_missing", "provider": choice.provider}, trace)
            return fallback_result()

        self._record("summary_prompt_built", {"provider": choice.provider, "prompt": prompt}, trace)

        request = ModelRequest(
            task="summarize",
            prompt=prompt,
            api_key=choice.api_key,
            model=choice.model,
            trace_id=trace.trace_id,
        )
        try:
            response = backend.generate(request)
        except Exception as e:
            # Backends are not supposed to raise; treat it like any other failure.
            logger.error(f"order summary: {choice.provider} backend raised {type(e).__name__}", exc_info=True)
            self._record(
                "model_call_failed",
                {"provider": choice.provider, "error_type": "unexpected_exception", "error": type(e).__name__},
                trace,
            )
            return fallback_result()

        if not response.ok:
            self._record(
                "model_call_failed",
                {"provider": choice.provider, "error_type": response.error_type, "error": response.error},
                trace,
            )
            return fallback_result()

        output = response.output or ""
        if not output.strip():
            self._record("model_output_empty", {"provider": choice.provider}, trace)
            return fallback_result()

        self._record(
            "model_output_received",
            {"provider": choice.provider, "chars": len(output), "output": output},
            trace,
        )
        return SummaryResult(summary=output, source="ai")

    def _record(self, name: str, metadata: Dict[str, Any], trace: TraceMetadata) -> None:
        try:
            if self.tracer.is_enabled():
                self.tracer.record_event(name, metadata, trace)
        except Exception:
            # Tracing failure is non-fatal
            pass


def produce_summary(facts: OrderFacts, orchestrator: Optional[SummaryOrchestrator] = None) -> SummaryResult:
    """Summarize facts with the default (environment-configured) orchestrator."""
    return (orchestrator or SummaryOrchestrator()).produce_summary(facts)
