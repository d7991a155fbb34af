"""Shared outcome handling for proxy-backed adapters."""

from abc import abstractmethod

from playscribe.common import (
    AudioPayload,
    AuthenticationError,
    JobTimeoutError,
    ProviderError,
    ProviderErrorKind,
    ProviderNetworkError,
    ProviderNotConfiguredError,
    setup_logging,
)
from playscribe.transcriber.domain.models import (
    CanonicalTranscript,
    CanonicalUtterance,
    ProviderFailure,
    ProviderOutcome,
    ProviderSuccess,
)
from playscribe.transcriber.infrastructure.interfaces import (
    ProxyGateway,
    TranscriptionAdapter,
)

logger = setup_logging()

_TYPED_ERRORS = (
    AuthenticationError,
    ProviderNotConfiguredError,
    ProviderError,
    ProviderNetworkError,
    JobTimeoutError,
)


class ProxyTranscriptionAdapter(TranscriptionAdapter):
    """
    Runs one provider call through the proxy and reports a ProviderOutcome.

    Typed proxy errors become failures of the matching kind. A response that
    cannot be normalized is a provider error. Cancellation is not caught.
    """

    def __init__(self, gateway: ProxyGateway):
        self._gateway = gateway

    async def transcribe(self, payload: AudioPayload) -> ProviderOutcome:
        try:
            utterances = await self._transcribe(payload)
            transcript = CanonicalTranscript(provider=self.provider, utterances=utterances)
        except _TYPED_ERRORS as e:
            return ProviderFailure(kind=e.kind, message=str(e))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.exception(
                "Unexpected provider response shape", extra={"adapter": self.name}
            )
            return ProviderFailure(
                kind=ProviderErrorKind.PROVIDER_ERROR,
                message=f"Unexpected {self.provider.value} response: {e}",
            )
        return ProviderSuccess(transcript=transcript)

    @abstractmethod
    async def _transcribe(self, payload: AudioPayload) -> list[CanonicalUtterance]:
        """Fetches and normalizes the provider's answer, raising typed errors."""
        pass
