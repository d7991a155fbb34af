"""Deepgram implementation of the ProviderClient interface."""

import httpx

from playscribe.common import AudioPayload, Provider, setup_logging
from playscribe.proxy.config import DeepgramConfig

from .http_provider import HttpProviderClient
from .interfaces import ProviderClient

logger = setup_logging()


class DeepgramClient(HttpProviderClient, ProviderClient):
    """Utterance-level diarized transcription through Deepgram's listen API."""

    provider = Provider.DEEPGRAM

    def __init__(self, client: httpx.AsyncClient, api_key: str, config: DeepgramConfig):
        super().__init__(client, api_key, config.timeout_seconds)
        self._config = config

    async def transcribe(self, payload: AudioPayload, request_id: str) -> dict:
        params = {
            "model": self._config.model,
            "smart_format": "true",
            "diarize": "true",
            "punctuate": "true",
            "utterances": "true",
            "multichannel": "false",
        }
        result = await self._request(
            "POST",
            f"{self._config.base_url}/v1/listen",
            params=params,
            headers={
                "Authorization": f"Token {self._api_key}",
                "Content-Type": payload.media_type,
            },
            content=payload.content,
        )
        logger.info("Deepgram transcription received", extra={"request_id": request_id})
        return result

    def _error_detail(self, body: dict | None) -> str | None:
        if isinstance(body, dict):
            return body.get("err_msg")
        return None
