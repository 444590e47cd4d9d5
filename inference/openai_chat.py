from typing import Any, Dict

from .base import ModelBackend
from .transport import (
    error_envelope_message,
    http_error,
    missing_credentials,
    post_json,
)
from .types import ModelRequest, ModelResponse

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIChatBackend(ModelBackend):
    """
    OpenAI Chat Completions backend.

    Wire shape:
      request:  {"model", "messages": [{"role": "user", "content": prompt}], "max_tokens"}
      response: {"choices": [{"message": {"content": "..."}}]}
      error:    {"error": {"message", "type"}}

    The credential travels as an "Authorization: Bearer" header.
    """

    name = "openai"

    def __init__(self, url: str = OPENAI_CHAT_COMPLETIONS_URL, default_model: str = OPENAI_DEFAULT_MODEL):
        self.url = url
        self.default_model = default_model

    def build_payload(self, request: ModelRequest) -> Dict[str, Any]:
        return {
            "model": request.model or self.default_model,
            "messages": [{"role": "user", "content": request.prompt}],
            "max_tokens": request.max_output_tokens,
        }

    def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Single-turn chat completion.

        Returns:
            success with the first choice's content (trimmed), or empty output
            when the provider returned no choices; an error response otherwise.
        """
        payload = self.build_payload(request)
        metadata = {
            "backend": self.name,
            "model": payload["model"],
            "trace_id": request.trace_id,
        }

        api_key = (request.api_key or "").strip()
        if not api_key:
            return missing_credentials(self.name, metadata)

        resp, failure = post_json(
            self.name,
            self.url,
            payload,
            timeout_s=request.timeout_s,
            metadata=metadata,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        if failure is not None:
            return failure

        if resp.status_code != 200:
            try:
                body = resp.json()
            except ValueError:
                body = None
            return http_error(self.name, resp, error_envelope_message(body), metadata)

        try:
            data = resp.json()
            choices = data.get("choices") or []
            if not choices:
                return ModelResponse(status="success", output="", metadata=metadata)
            content = (choices[0]["message"].get("content") or "").strip()
        except (ValueError, AttributeError, KeyError, TypeError) as e:
            return ModelResponse(
                status="fatal_error",
                error_type="invalid_output",
                error=f"{self.name}: malformed response body ({type(e).__name__})",
                metadata=metadata,
            )

        return ModelResponse(status="success", output=content, metadata=metadata)
