"""Handler for transcribing uploaded recordings."""

from collections.abc import Callable

from playscribe.common import setup_logging
from playscribe.transcriber.domain import (
    RecordingMessage,
    TranscriptBuilder,
    TranscriptionResult,
    encode_audio,
)
from playscribe.transcriber.domain.orchestrator import TranscriptionOrchestrator
from playscribe.transcriber.exceptions import ProxyUnavailableError
from playscribe.transcriber.infrastructure.interfaces import ProxyGateway, StorageClient

logger = setup_logging()


class RecordingMessageHandler:
    """Orchestrates recording-to-transcript operations."""

    def __init__(
        self,
        storage: StorageClient,
        gateway_factory: Callable[[str], ProxyGateway],
        orchestrator_factory: Callable[[ProxyGateway], TranscriptionOrchestrator],
        transcript_builder: TranscriptBuilder,
        prefilter_capabilities: bool = True,
    ):
        self._storage = storage
        self._gateway_factory = gateway_factory
        self._orchestrator_factory = orchestrator_factory
        self._transcript_builder = transcript_builder
        self._prefilter_capabilities = prefilter_capabilities

    async def process(self, message: RecordingMessage) -> TranscriptionResult:
        """
        Transcribes a stored recording and stores the formatted transcript.

        The recording is held in memory for this call only.

        Raises:
            StorageDownloadError: If the recording download fails.
            PayloadValidationError: If the recording is empty.
            AllProvidersFailedError: If every provider failed.
            StorageUploadError: If the transcript upload fails.
        """
        logger.info(
            "Processing recording",
            extra={"file_name": message.file_name, "bucket_name": message.bucket_name},
        )

        audio_data = self._storage.download_recording(message.bucket_name, message.file_name)
        payload = encode_audio(
            audio_data, media_type=message.content_type, file_name=message.file_name
        )

        gateway = self._gateway_factory(message.access_token)
        orchestrator = self._orchestrator_factory(gateway)
        if self._prefilter_capabilities:
            orchestrator = await self._restrict_to_configured(orchestrator, gateway)

        transcript = await orchestrator.transcribe(payload)

        transcript_text, transcription_object_name = self._transcript_builder.build(
            transcript, message.file_name
        )
        result = TranscriptionResult(
            transcription_object_name=transcription_object_name,
            bucket_name=message.bucket_name,
            provider=transcript.provider,
        )

        self._storage.upload_transcript(
            result.bucket_name, result.transcription_object_name, transcript_text
        )

        logger.info(
            "Recording transcribed",
            extra={
                "audio_file": message.file_name,
                "transcription_file": result.transcription_object_name,
                "provider": result.provider.value,
                "utterances": len(transcript.utterances),
            },
        )
        return result

    async def _restrict_to_configured(
        self, orchestrator: TranscriptionOrchestrator, gateway: ProxyGateway
    ) -> TranscriptionOrchestrator:
        """Drops adapters the proxy reports as unconfigured. Advisory only."""
        try:
            capabilities = await gateway.capabilities()
        except ProxyUnavailableError:
            logger.warning("Capability check unavailable, trying every provider")
            return orchestrator
        return orchestrator.with_capabilities(capabilities)
