"""Error kinds raised by the generation service and the studio client."""


class FluxStudioError(Exception):
    """Base class for all studio errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self):
        return self.message

    def to_dict(self) -> dict:
        data = {"error": self.message}
        if self.details:
            data["details"] = self.details
        return data


class ValidationError(FluxStudioError):
    """The request is missing something the user can fix (e.g. the prompt)."""


class ConfigurationError(FluxStudioError):
    """The server is missing configuration only an operator can fix."""


class GenerationError(FluxStudioError):
    """The provider failed or returned no images."""


class ClientNetworkError(FluxStudioError):
    """A call from the studio client to the generation route failed."""
