"""
HTTP plumbing shared by the hosted provider backends.

Both providers speak JSON over a single POST. What differs between them
(endpoint, where the credential travels, body and response shape) stays in
the backend modules; what is shared lives here:

- posting with a fixed timeout and turning requests exceptions into
  ModelResponse errors
- classifying non-2xx statuses
- building the "<provider> <code>: <message>" error string
"""

from typing import Any, Dict, Optional, Tuple

import requests

from .types import ModelResponse


def status_line(resp: requests.Response) -> str:
    """Return e.g. "429 Too Many Requests"."""
    return f"{resp.status_code} {resp.reason or ''}".strip()


def missing_credentials(provider: str, metadata: Dict[str, Any]) -> ModelResponse:
    return ModelResponse(
        status="fatal_error",
        error_type="missing_credentials",
        error=f"{provider}: empty API key",
        metadata=metadata,
    )


def post_json(
    provider: str,
    url: str,
    payload: Dict[str, Any],
    timeout_s: float,
    metadata: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, str]] = None,
) -> Tuple[Optional[requests.Response], Optional[ModelResponse]]:
    """
    POST payload as JSON.

    Returns:
        (response, None) when the server answered (any status)
        (None, error_response) on timeout or connection failure
    """
    all_headers = {"Content-Type": "application/json"}
    if headers:
        all_headers.update(headers)

    try:
        resp = requests.post(
            url,
            json=payload,
            headers=all_headers,
            params=params,
            timeout=timeout_s,
        )
        return resp, None

    except requests.Timeout as e:
        return None, ModelResponse(
            status="recoverable_error",
            error_type="timeout",
            error=f"{provider}: request timed out after {timeout_s:g}s",
            metadata={**metadata, "exception": type(e).__name__},
        )

    except requests.RequestException as e:
        return None, ModelResponse(
            status="recoverable_error",
            error_type="backend_unavailable",
            error=f"{provider}: {type(e).__name__}",
            metadata={**metadata, "exception": type(e).__name__},
        )


def http_error(
    provider: str,
    resp: requests.Response,
    message: Optional[str],
    metadata: Dict[str, Any],
) -> ModelResponse:
    """
    Classify a non-2xx answer.

    message is the provider's own error text when its envelope carried one;
    otherwise the status line is used.
    """
    code = resp.status_code
    if code == 429:
        status, error_type = "recoverable_error", "rate_limited"
    elif code >= 500:
        status, error_type = "recoverable_error", "http_error"
    else:
        status, error_type = "fatal_error", "http_error"

    return ModelResponse(
        status=status,
        error_type=error_type,
        error=f"{provider} {code}: {message or status_line(resp)}",
        metadata={**metadata, "http_status": code},
    )


def error_envelope_message(body: Any) -> Optional[str]:
    """Pull error.message out of {"error": {"message": ...}} if present."""
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict):
        message = err.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None
