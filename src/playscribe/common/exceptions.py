"""Custom exceptions shared across playscribe services."""

from playscribe.common.types import Provider, ProviderErrorKind


class PayloadValidationError(Exception):
    """Raised when an audio payload is missing or empty."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid audio payload: {reason}")


class AuthenticationError(Exception):
    """Raised when a caller's bearer token cannot be verified."""

    kind = ProviderErrorKind.UNAUTHENTICATED

    def __init__(self, reason: str = "Invalid or expired token"):
        self.reason = reason
        super().__init__(reason)


class ProviderNotConfiguredError(Exception):
    """Raised when a provider has no credentials configured."""

    kind = ProviderErrorKind.NOT_CONFIGURED

    def __init__(self, provider: Provider):
        self.provider = provider
        super().__init__(f"{provider.value} service not configured")


class ProviderError(Exception):
    """Raised when a provider answers with a failure status."""

    kind = ProviderErrorKind.PROVIDER_ERROR

    def __init__(
        self,
        provider: Provider,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.provider = provider
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


class ProviderNetworkError(Exception):
    """Raised when a provider could not be reached or did not answer in time."""

    kind = ProviderErrorKind.NETWORK_ERROR

    def __init__(self, provider: Provider, cause: Exception | None = None):
        self.provider = provider
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not reach {provider.value}{detail}")


class JobTimeoutError(Exception):
    """Raised when an asynchronous job never reaches a terminal state in budget."""

    kind = ProviderErrorKind.TIMEOUT

    def __init__(self, job_id: str, attempts_made: int, max_attempts: int):
        self.job_id = job_id
        self.attempts_made = attempts_made
        self.max_attempts = max_attempts
        super().__init__(
            f"Job '{job_id}' did not finish after {attempts_made} of "
            f"{max_attempts} status checks"
        )


class AllProvidersFailedError(Exception):
    """Raised when every configured transcription adapter has failed."""

    def __init__(self, failures: list):
        self.failures = list(failures)
        reasons = "; ".join(
            f"{f.adapter_name} ({f.kind.value}): {f.message}" for f in self.failures
        )
        super().__init__(
            f"All transcription services failed: {reasons or 'no adapters configured'}"
        )


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
