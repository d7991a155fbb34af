"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, field_validator

from playscribe.common import MinioConfig, Provider, QueueConfig, RabbitMQConfig

DEFAULT_PROVIDER_ORDER = (Provider.ELEVENLABS, Provider.DEEPGRAM, Provider.ASSEMBLYAI)


class PollingConfig(BaseModel, frozen=True):
    """Status polling budget for job-based providers."""

    poll_interval_ms: int = 2000
    max_attempts: int = 60
    deadline_seconds: float | None = None


class ProxyConfig(BaseModel, frozen=True):
    """Where the transcription proxy lives and how long to wait for it."""

    base_url: str = "http://transcription-proxy:8000"
    timeout_seconds: float = 150.0


class TranscriptionConfig(BaseModel, frozen=True):
    """Fallback order and overall request budget."""

    provider_order: tuple[Provider, ...] = DEFAULT_PROVIDER_ORDER
    request_timeout_seconds: float | None = None
    prefilter_capabilities: bool = True

    @field_validator("provider_order", mode="before")
    @classmethod
    def _parse_order(cls, value):
        if isinstance(value, str):
            value = [name.strip().lower() for name in value.split(",") if name.strip()]
        return value


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    proxy: ProxyConfig = ProxyConfig()
    polling: PollingConfig = PollingConfig()
    transcription: TranscriptionConfig = TranscriptionConfig()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
            bucket_name=os.getenv("MINIO_BUCKET", "recordings"),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            port=int(os.getenv("RABBITMQ_PORT", "5672")),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
            queue_config=QueueConfig(
                name="recording_transcription_queue",
                expected_routing_key="recording.upload.completed",
                success_routing_key="recording.transcription.completed",
                dlq_name="dlq_recording_transcriber",
                dlq_routing_key="recording.transcription.failed",
            ),
        ),
        proxy=ProxyConfig(
            base_url=os.getenv("PROXY_BASE_URL", "http://transcription-proxy:8000"),
            timeout_seconds=float(os.getenv("PROXY_TIMEOUT_SECONDS", "150")),
        ),
        polling=PollingConfig(
            poll_interval_ms=int(os.getenv("ASSEMBLYAI_POLL_INTERVAL_MS", "2000")),
            max_attempts=int(os.getenv("ASSEMBLYAI_MAX_ATTEMPTS", "60")),
        ),
        transcription=TranscriptionConfig(
            provider_order=os.getenv(
                "TRANSCRIPTION_PROVIDER_ORDER", "elevenlabs,deepgram,assemblyai"
            ),
            request_timeout_seconds=_optional_float("TRANSCRIPTION_REQUEST_TIMEOUT_SECONDS"),
        ),
    )
