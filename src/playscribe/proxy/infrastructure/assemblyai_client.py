"""AssemblyAI implementation of the JobProviderClient interface."""

import httpx

from playscribe.common import AudioPayload, Provider, ProviderError, setup_logging
from playscribe.proxy.config import AssemblyAIConfig

from .http_provider import HttpProviderClient
from .interfaces import JobProviderClient

logger = setup_logging()


class AssemblyAIClient(HttpProviderClient, JobProviderClient):
    """Submit-then-poll transcription through AssemblyAI's v2 REST API."""

    provider = Provider.ASSEMBLYAI

    def __init__(self, client: httpx.AsyncClient, api_key: str, config: AssemblyAIConfig):
        super().__init__(client, api_key, config.timeout_seconds)
        self._config = config

    async def submit(self, payload: AudioPayload, request_id: str) -> str:
        """
        Uploads the audio, then requests a speaker-labelled transcript.

        Returns:
            The AssemblyAI transcript id to poll.
        """
        upload = await self._request(
            "POST",
            f"{self._config.base_url}/v2/upload",
            headers={
                "Authorization": self._api_key,
                "Content-Type": "application/octet-stream",
            },
            content=payload.content,
        )
        upload_url = upload.get("upload_url")
        if not upload_url:
            raise ProviderError(self.provider, "Upload failed: no upload_url returned")

        job = await self._request(
            "POST",
            f"{self._config.base_url}/v2/transcript",
            headers={"Authorization": self._api_key},
            json={
                "audio_url": upload_url,
                "speaker_labels": self._config.speaker_labels,
                "speakers_expected": self._config.speakers_expected,
            },
        )
        job_id = job.get("id")
        if not job_id:
            raise ProviderError(self.provider, "Transcription request returned no job id")

        logger.info(
            "AssemblyAI transcription started",
            extra={"request_id": request_id, "job_id": job_id},
        )
        return job_id

    async def fetch_status(self, job_id: str) -> dict:
        return await self._request(
            "GET",
            f"{self._config.base_url}/v2/transcript/{job_id}",
            headers={"Authorization": self._api_key},
        )

    def _error_detail(self, body: dict | None) -> str | None:
        if isinstance(body, dict):
            return body.get("error")
        return None
