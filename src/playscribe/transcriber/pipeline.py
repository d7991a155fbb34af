"""Assembly of the adapter chain from configuration."""

from playscribe.common import Provider
from playscribe.transcriber.config import AppConfig
from playscribe.transcriber.domain.orchestrator import TranscriptionOrchestrator
from playscribe.transcriber.infrastructure.adapters import (
    AssemblyAIAdapter,
    DeepgramAdapter,
    ElevenLabsAdapter,
)
from playscribe.transcriber.infrastructure.interfaces import (
    ProxyGateway,
    TranscriptionAdapter,
)


def build_adapters(gateway: ProxyGateway, config: AppConfig) -> list[TranscriptionAdapter]:
    """Creates one adapter per provider, in the configured fallback order."""
    factories = {
        Provider.ELEVENLABS: lambda: ElevenLabsAdapter(gateway),
        Provider.DEEPGRAM: lambda: DeepgramAdapter(gateway),
        Provider.ASSEMBLYAI: lambda: AssemblyAIAdapter(
            gateway,
            poll_interval_ms=config.polling.poll_interval_ms,
            max_attempts=config.polling.max_attempts,
            deadline_seconds=config.polling.deadline_seconds,
        ),
    }
    return [factories[provider]() for provider in config.transcription.provider_order]


def build_orchestrator(gateway: ProxyGateway, config: AppConfig) -> TranscriptionOrchestrator:
    return TranscriptionOrchestrator(
        build_adapters(gateway, config),
        request_timeout_seconds=config.transcription.request_timeout_seconds,
    )
