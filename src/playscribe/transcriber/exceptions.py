"""Custom exceptions for the transcriber service."""


class ProxyUnavailableError(Exception):
    """Raised when the transcription proxy itself cannot be queried."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Transcription proxy unavailable for '{operation}'")
