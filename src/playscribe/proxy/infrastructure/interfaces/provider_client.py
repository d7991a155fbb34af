"""Abstract interfaces for outbound speech-to-text provider calls."""

from abc import ABC, abstractmethod

from playscribe.common import AudioPayload, Provider


class ProviderClient(ABC):
    """A provider that answers a transcription request in a single call."""

    provider: Provider

    @abstractmethod
    async def transcribe(self, payload: AudioPayload, request_id: str) -> dict:
        """
        Sends audio to the provider and returns its raw JSON response.

        Args:
            payload: The recording to transcribe.
            request_id: Anonymized id, the only caller-correlating token sent.

        Raises:
            ProviderError: If the provider answers with a failure status.
            ProviderNetworkError: If the provider cannot be reached.
        """


class JobProviderClient(ABC):
    """A provider that accepts a job now and reports its result later."""

    provider: Provider

    @abstractmethod
    async def submit(self, payload: AudioPayload, request_id: str) -> str:
        """
        Submits audio for transcription.

        Returns:
            The provider's job id.

        Raises:
            ProviderError: If the provider rejects the submission.
            ProviderNetworkError: If the provider cannot be reached.
        """

    @abstractmethod
    async def fetch_status(self, job_id: str) -> dict:
        """
        Fetches the raw status document of a submitted job.

        Raises:
            ProviderError: If the provider answers with a failure status.
            ProviderNetworkError: If the provider cannot be reached.
        """
