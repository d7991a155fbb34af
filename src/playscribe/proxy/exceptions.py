"""Custom exceptions for the transcription proxy service."""

from playscribe.common import Provider


class UnsupportedOperationError(Exception):
    """Raised when a provider is called with the wrong call shape (sync vs job)."""

    def __init__(self, provider: Provider, operation: str):
        self.provider = provider
        self.operation = operation
        super().__init__(f"{provider.value} does not support '{operation}'")


class AuditPersistenceError(Exception):
    """Raised when an anonymized request record cannot be stored."""

    def __init__(self, request_id: str, cause: Exception | None = None):
        self.request_id = request_id
        self.cause = cause
        super().__init__(f"Failed to persist request record '{request_id}'")
