"""Exception types raised by the gateway and its handlers.

Everything derives from :class:`GatewayError`, whose ``message`` is the text
returned to the client in the ``{"error": ...}`` body.
"""


class GatewayError(Exception):
    """Base exception for the gateway."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(GatewayError):
    """Required configuration is missing; the process must not serve requests."""


class InvalidActionError(GatewayError):
    """The envelope names an action the gateway does not support."""

    def __init__(self, action: object = None):
        self.action = action
        super().__init__("Invalid action")


class InvalidPayloadError(GatewayError):
    """The payload is missing fields required by its action."""


class ProviderError(GatewayError):
    """A failure reported by the upstream generative-AI provider."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ResponseShapeError(GatewayError):
    """The provider answered, but not with the shape the operation requires."""


class ServiceBusyError(GatewayError):
    """A transient upstream failure persisted through every retry attempt."""

    def __init__(self, attempts: int, last_error: BaseException | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__("The AI service is currently busy. Please try again in a few moments.")


class RetryBudgetExhaustedError(GatewayError):
    """The retry loop finished without either returning or raising."""

    def __init__(self):
        super().__init__("API call failed after multiple retries.")
