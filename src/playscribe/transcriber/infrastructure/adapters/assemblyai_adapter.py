"""Submit-then-poll adapter for AssemblyAI."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from playscribe.common import AudioPayload, Provider, ProviderError, setup_logging
from playscribe.transcriber.domain.job_poller import JobPoller
from playscribe.transcriber.domain.models import CanonicalUtterance, JobStatus
from playscribe.transcriber.domain.normalizers import (
    WordToken,
    collapse_cjk_spacing,
    flat_text_utterance,
    group_word_tokens,
    speaker_letter_to_index,
)
from playscribe.transcriber.infrastructure.interfaces import ProxyGateway

from .base import ProxyTranscriptionAdapter

logger = setup_logging()


class AssemblyAIAdapter(ProxyTranscriptionAdapter):
    """
    Submits a job through the proxy, then polls it to completion.

    A failed submission fails the adapter at once. Only status checks are
    retried, by the JobPoller.
    """

    name = "AssemblyAI"
    provider = Provider.ASSEMBLYAI

    def __init__(
        self,
        gateway: ProxyGateway,
        poll_interval_ms: int = 2000,
        max_attempts: int = 60,
        deadline_seconds: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(gateway)
        self._poller = JobPoller(
            self._fetch_status,
            poll_interval_ms=poll_interval_ms,
            max_attempts=max_attempts,
            deadline_seconds=deadline_seconds,
            sleep=sleep,
            clock=clock,
        )

    async def _transcribe(self, payload: AudioPayload) -> list[CanonicalUtterance]:
        job_id = await self._gateway.submit_job(self.provider, payload)
        logger.info("AssemblyAI job submitted", extra={"job_id": job_id})

        state = await self._poller.poll(job_id)
        if state.status == JobStatus.FAILED:
            raise ProviderError(self.provider, state.error or "Transcription failed")
        return normalize_assemblyai(state.result or {})

    async def _fetch_status(self, job_id: str) -> dict:
        return await self._gateway.poll_job(self.provider, job_id)


def normalize_assemblyai(body: dict) -> list[CanonicalUtterance]:
    """
    Normalizes a completed AssemblyAI transcript.

    Utterance labels map by alphabetic position (A is 0). Without utterances,
    speaker-labelled words are grouped into turns, and failing that the flat
    text becomes one speaker-0 utterance.

    Raises:
        ValueError: If a speaker label is not a single letter.
    """
    utterances = body.get("utterances") or []
    if utterances:
        return [
            CanonicalUtterance(
                speaker_index=speaker_letter_to_index(u.get("speaker")),
                text=collapse_cjk_spacing(u["text"]),
                start_offset_ms=float(u.get("start") or 0),
                end_offset_ms=float(u.get("end") or 0),
            )
            for u in utterances
            if (u.get("text") or "").strip()
        ]

    words = body.get("words") or []
    if words and all(w.get("speaker") is not None for w in words):
        grouped = group_word_tokens(
            WordToken(
                speaker_index=speaker_letter_to_index(w["speaker"]),
                text=w.get("text") or "",
                start=float(w.get("start") or 0),
                end=float(w.get("end") or 0),
            )
            for w in words
        )
        if grouped:
            return grouped

    return flat_text_utterance(body.get("text"))
