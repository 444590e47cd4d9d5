from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]

# Generation latency is unpredictable; the caller must still never hang.
DEFAULT_TIMEOUT_S: float = 45.0

# Large enough for 2-3 full sentences without truncating mid-sentence.
DEFAULT_MAX_OUTPUT_TOKENS: int = 512


@dataclass
class ModelRequest:
    task: str                  # e.g. "summarize"
    prompt: str
    api_key: str = ""          # provider credential, trimmed by the backend
    model: Optional[str] = None
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    timeout_s: float = DEFAULT_TIMEOUT_S
    trace_id: Optional[str] = None


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error_type: Optional[str] = None   # missing_credentials | timeout | backend_unavailable | rate_limited | http_error | invalid_output
    error: Optional[str] = None        # human-readable message, safe to log
    metadata: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
