"""Ordered fallback across transcription adapters."""

import asyncio
from collections.abc import Mapping, Sequence

from playscribe.common import (
    AllProvidersFailedError,
    AudioPayload,
    Provider,
    ProviderErrorKind,
    setup_logging,
    validate_audio_payload,
)
from playscribe.transcriber.infrastructure.interfaces import TranscriptionAdapter

from .models import AdapterFailure, CanonicalTranscript, ProviderFailure

logger = setup_logging()


class TranscriptionOrchestrator:
    """
    Tries adapters strictly in order and returns the first transcript.

    A failed adapter is recorded and the next one is tried; no adapter is
    retried. When every adapter has failed, a single AllProvidersFailedError
    lists each failure in order.
    """

    def __init__(
        self,
        adapters: Sequence[TranscriptionAdapter],
        request_timeout_seconds: float | None = None,
    ):
        self._adapters = list(adapters)
        self._request_timeout = request_timeout_seconds

    @property
    def adapters(self) -> list[TranscriptionAdapter]:
        return list(self._adapters)

    async def transcribe(self, payload: AudioPayload) -> CanonicalTranscript:
        """
        Transcribes a recording with the first adapter that succeeds.

        Raises:
            PayloadValidationError: If the payload is missing or empty. No
                adapter is invoked.
            AllProvidersFailedError: If every adapter failed, or the request
                budget ran out.
        """
        validate_audio_payload(payload)

        loop = asyncio.get_running_loop()
        deadline = (
            loop.time() + self._request_timeout if self._request_timeout is not None else None
        )
        failures: list[AdapterFailure] = []

        for adapter in self._adapters:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                failures.append(self._budget_failure(adapter))
                break

            logger.info(
                "Trying transcription adapter",
                extra={"adapter": adapter.name, "provider": adapter.provider.value},
            )
            try:
                outcome = await asyncio.wait_for(adapter.transcribe(payload), remaining)
            except asyncio.TimeoutError:
                failures.append(self._budget_failure(adapter))
                break

            if isinstance(outcome, ProviderFailure):
                failures.append(
                    AdapterFailure(
                        adapter_name=adapter.name,
                        provider=adapter.provider,
                        kind=outcome.kind,
                        message=outcome.message,
                    )
                )
                logger.warning(
                    "Transcription adapter failed",
                    extra={
                        "adapter": adapter.name,
                        "kind": outcome.kind.value,
                        "error": outcome.message,
                    },
                )
                continue

            transcript = outcome.transcript
            logger.info(
                "Transcription succeeded",
                extra={
                    "adapter": adapter.name,
                    "utterances": len(transcript.utterances),
                    "failed_before": len(failures),
                },
            )
            return transcript

        error = AllProvidersFailedError(failures)
        logger.error("All transcription adapters failed", extra={"error": str(error)})
        raise error

    def with_capabilities(
        self, capabilities: Mapping[Provider | str, bool]
    ) -> "TranscriptionOrchestrator":
        """
        Returns an orchestrator limited to providers reported as configured.

        Order is preserved. Providers missing from ``capabilities`` are dropped.
        """
        available = {Provider(key) for key, ok in capabilities.items() if ok}
        return TranscriptionOrchestrator(
            [a for a in self._adapters if a.provider in available],
            self._request_timeout,
        )

    def _budget_failure(self, adapter: TranscriptionAdapter) -> AdapterFailure:
        logger.error(
            "Transcription request budget exhausted",
            extra={"adapter": adapter.name, "budget_seconds": self._request_timeout},
        )
        return AdapterFailure(
            adapter_name=adapter.name,
            provider=adapter.provider,
            kind=ProviderErrorKind.TIMEOUT,
            message=f"request budget of {self._request_timeout}s exceeded",
        )
