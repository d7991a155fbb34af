"""Abstract interface for provider transcription adapters."""

from abc import ABC, abstractmethod

from playscribe.common import AudioPayload, Provider
from playscribe.transcriber.domain.models import ProviderOutcome


class TranscriptionAdapter(ABC):
    """Translates one provider's wire format into the canonical transcript."""

    name: str
    provider: Provider

    @abstractmethod
    async def transcribe(self, payload: AudioPayload) -> ProviderOutcome:
        """
        Transcribes a recording through the proxy.

        Returns:
            ProviderSuccess with the canonical transcript, or ProviderFailure
            with the failure kind and reason. Provider failures are never
            raised.
        """
        pass
