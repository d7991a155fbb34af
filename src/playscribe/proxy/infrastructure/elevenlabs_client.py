"""ElevenLabs Scribe implementation of the ProviderClient interface."""

import httpx

from playscribe.common import AudioPayload, Provider, setup_logging
from playscribe.proxy.config import ElevenLabsConfig

from .http_provider import HttpProviderClient
from .interfaces import ProviderClient

logger = setup_logging()


class ElevenLabsClient(HttpProviderClient, ProviderClient):
    """Word-level diarized transcription through ElevenLabs speech-to-text."""

    provider = Provider.ELEVENLABS

    def __init__(self, client: httpx.AsyncClient, api_key: str, config: ElevenLabsConfig):
        super().__init__(client, api_key, config.timeout_seconds)
        self._config = config

    async def transcribe(self, payload: AudioPayload, request_id: str) -> dict:
        """
        Uploads the recording as multipart form data.

        The file is named after the anonymized request id so nothing in the
        upload identifies the caller.
        """
        files = {
            "file": (
                f"{request_id}.{payload.extension}",
                payload.content,
                payload.media_type,
            )
        }
        data = {
            "model_id": self._config.model_id,
            "diarize": "true",
            "diarization_threshold": str(self._config.diarization_threshold),
            "temperature": "0",
            "tag_audio_events": "false",
            "timestamps_granularity": "word",
        }

        result = await self._request(
            "POST",
            f"{self._config.base_url}/v1/speech-to-text",
            params={"include_timestamps": "true"},
            headers={"xi-api-key": self._api_key},
            files=files,
            data=data,
        )
        logger.info(
            "ElevenLabs transcription received",
            extra={"request_id": request_id, "word_count": len(result.get("words") or [])},
        )
        return result

    def _error_detail(self, body: dict | None) -> str | None:
        if not isinstance(body, dict):
            return None
        detail = body.get("detail")
        if isinstance(detail, dict):
            return detail.get("message")
        if isinstance(detail, str):
            return detail
        return None
