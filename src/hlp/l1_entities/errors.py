"""Domain error types."""

from __future__ import annotations


class InvalidRoleError(ValueError):
    """Raised when a transcript boundary or a writer names an unknown role."""

    def __init__(self, role: str) -> None:
        super().__init__(f'invalid role: {role}')
        self.role = role


class StreamFailedError(Exception):
    """Raised when the chat service, the network, or the request deadline fails a stream."""


class SilentTerminationError(Exception):
    """Raised when the input stream closes while waiting for the next prompt.

    The CLI maps this to a clean exit without printing anything.
    """

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__(f'terminating silently: {cause}')
        self.cause = cause
