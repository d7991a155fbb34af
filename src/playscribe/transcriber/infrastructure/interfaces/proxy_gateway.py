"""Abstract interface for reaching the anonymizing proxy."""

from abc import ABC, abstractmethod

from playscribe.common import AudioPayload, Provider


class ProxyGateway(ABC):
    """
    The adapters' only route to a provider.

    Implementations authenticate as one caller and raise the shared typed
    errors (AuthenticationError, ProviderNotConfiguredError, ProviderError,
    ProviderNetworkError) for failures.
    """

    @abstractmethod
    async def forward(self, provider: Provider, payload: AudioPayload) -> dict:
        """Sends a recording to a single-call provider and returns its raw response."""
        pass

    @abstractmethod
    async def submit_job(self, provider: Provider, payload: AudioPayload) -> str:
        """Submits a recording to a job-based provider and returns the job id."""
        pass

    @abstractmethod
    async def poll_job(self, provider: Provider, job_id: str) -> dict:
        """Returns the raw status document of a submitted job."""
        pass

    @abstractmethod
    async def capabilities(self) -> dict[Provider, bool]:
        """Reports, per provider, whether the proxy has credentials for it."""
        pass
