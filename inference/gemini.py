from typing import Any, Dict

from .base import ModelBackend
from .transport import (
    error_envelope_message,
    http_error,
    missing_credentials,
    post_json,
)
from .types import ModelRequest, ModelResponse

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiBackend(ModelBackend):
    """
    Google Gemini generateContent backend.

    Wire shape:
      request:  {"contents": [{"parts": [{"text": prompt}]}],
                 "generationConfig": {"maxOutputTokens": N}}
      response: {"candidates": [{"content": {"parts": [{"text": "..."}, ...]}}]}
      error:    {"error": {"code", "message", "status"}}

    Unlike OpenAI, the credential is sent as the ``key`` query parameter,
    not as a header. A reply may be split across several parts; they are
    joined in order.
    """

    name = "gemini"

    def __init__(self, base_url: str = GEMINI_API_BASE_URL, default_model: str = GEMINI_DEFAULT_MODEL):
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{model}:generateContent"

    def build_payload(self, request: ModelRequest) -> Dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": request.prompt}]},
            ],
            "generationConfig": {"maxOutputTokens": request.max_output_tokens},
        }

    def generate(self, request: ModelRequest) -> ModelResponse:
        model = request.model or self.default_model
        # The URL is logged by callers; the key is kept out of it.
        metadata = {
            "backend": self.name,
            "model": model,
            "url": self.endpoint(model),
            "trace_id": request.trace_id,
        }

        api_key = (request.api_key or "").strip()
        if not api_key:
            return missing_credentials(self.name, metadata)

        resp, failure = post_json(
            self.name,
            self.endpoint(model),
            self.build_payload(request),
            timeout_s=request.timeout_s,
            metadata=metadata,
            params={"key": api_key},
        )
        if failure is not None:
            return failure

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code != 200:
            return http_error(self.name, resp, error_envelope_message(body), metadata)

        if body is None:
            return ModelResponse(
                status="fatal_error",
                error_type="invalid_output",
                error=f"{self.name}: response body is not JSON",
                metadata=metadata,
            )

        try:
            text = join_candidate_parts(body)
        except (AttributeError, KeyError, TypeError) as e:
            return ModelResponse(
                status="fatal_error",
                error_type="invalid_output",
                error=f"{self.name}: malformed response body ({type(e).__name__})",
                metadata=metadata,
            )

        return ModelResponse(status="success", output=text, metadata=metadata)


def join_candidate_parts(body: Dict[str, Any]) -> str:
    """
    Concatenate the text of every part of the first candidate, in order.

    Gemini may answer with e.g. "Here's your order" in one part and the
    actual summary in the next. No candidates or no parts gives "".
    """
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text") or "" for p in parts).strip()
