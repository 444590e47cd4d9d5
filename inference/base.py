from abc import ABC, abstractmethod
from .types import ModelRequest, ModelResponse


class ModelBackend(ABC):
    """
    Abstract text-generation provider boundary.
    Summary code must depend ONLY on this interface.

    Implementations never raise: transport, protocol and credential
    failures come back as a ModelResponse with a non-success status.
    A success with empty output means the provider answered but had
    nothing usable to say.
    """

    name: str = "base"

    @abstractmethod
    def generate(self, request: ModelRequest) -> ModelResponse:
        """Generate text for request.prompt using request.api_key."""
        raise NotImplementedError
