"""
Provider boundary layer for text generation.

This package provides a clean abstraction over hosted text-generation APIs,
so the summary code stays agnostic of each provider's wire protocol.

Supported backends:
- OpenAIChatBackend: OpenAI Chat Completions (bearer header auth)
- GeminiBackend: Google Gemini generateContent (query-parameter auth)
- StubModelBackend: Deterministic fake provider (tests, local development)

Example usage:
    from inference import OpenAIChatBackend, ModelRequest

    backend = OpenAIChatBackend()
    request = ModelRequest(task="summarize", prompt="...", api_key=key)
    response = backend.generate(request)
"""

from .types import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TIMEOUT_S,
    ModelRequest,
    ModelResponse,
    ModelStatus,
)
from .base import ModelBackend
from .stub import StubModelBackend
from .openai_chat import OpenAIChatBackend
from .gemini import GeminiBackend

__all__ = [
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "DEFAULT_TIMEOUT_S",
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ModelBackend",
    "StubModelBackend",
    "OpenAIChatBackend",
    "GeminiBackend",
]
