from typing import List, Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class StubModelBackend(ModelBackend):
    """
    Deterministic fake provider for testing and local development.

    Never touches the network. Either replays a fixed response or echoes
    a fixed output, and records every request it receives so tests can
    assert on call counts and prompts.
    """

    name = "stub"

    def __init__(self, output: str = "This is a stubbed summary.", response: Optional[ModelResponse] = None):
        self.output = output
        self.response = response
        self.requests: List[ModelRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def generate(self, request: ModelRequest) -> ModelResponse:
        self.requests.append(request)

        if self.response is not None:
            return self.response

        return ModelResponse(
            status="success",
            output=self.output,
            metadata={"backend": self.name, "trace_id": request.trace_id},
        )
