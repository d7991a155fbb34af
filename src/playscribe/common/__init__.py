from playscribe.common.config import MinioConfig, QueueConfig, RabbitMQConfig
from playscribe.common.exceptions import (
    AllProvidersFailedError,
    AuthenticationError,
    EventPublishError,
    JobTimeoutError,
    PayloadValidationError,
    ProviderError,
    ProviderNetworkError,
    ProviderNotConfiguredError,
    StorageDownloadError,
    StorageUploadError,
)
from playscribe.common.logging import setup_logging
from playscribe.common.models import (
    AnonymizedRequestRecord,
    AudioPayload,
    validate_audio_payload,
)
from playscribe.common.types import Provider, ProviderErrorKind

__all__ = [
    "setup_logging",
    "MinioConfig",
    "QueueConfig",
    "RabbitMQConfig",
    "AllProvidersFailedError",
    "AuthenticationError",
    "EventPublishError",
    "JobTimeoutError",
    "PayloadValidationError",
    "ProviderError",
    "ProviderNetworkError",
    "ProviderNotConfiguredError",
    "StorageDownloadError",
    "StorageUploadError",
    "AnonymizedRequestRecord",
    "AudioPayload",
    "validate_audio_payload",
    "Provider",
    "ProviderErrorKind",
]
