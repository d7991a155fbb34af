"""Shared HTTP plumbing for provider clients."""

import httpx

from playscribe.common import (
    Provider,
    ProviderError,
    ProviderNetworkError,
    setup_logging,
)

logger = setup_logging()


class HttpProviderClient:
    """
    Base for provider clients that talk REST over a shared httpx client.

    Maps transport failures to ProviderNetworkError and non-2xx answers to
    ProviderError. Request bodies are never logged.
    """

    provider: Provider

    def __init__(self, client: httpx.AsyncClient, api_key: str, timeout_seconds: float):
        self._client = client
        self._api_key = api_key
        self._timeout = timeout_seconds

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = await self._client.request(
                method, url, timeout=self._timeout, **kwargs
            )
        except httpx.TransportError as e:
            logger.exception(
                "Provider unreachable",
                extra={"provider": self.provider.value, "error_type": type(e).__name__},
            )
            raise ProviderNetworkError(self.provider, e) from e

        body = self._parse_json(response)

        if response.is_error:
            message = self._error_detail(body) or (
                f"{self.provider.value} API error: {response.status_code}"
            )
            logger.error(
                "Provider returned an error",
                extra={
                    "provider": self.provider.value,
                    "status_code": response.status_code,
                },
            )
            raise ProviderError(self.provider, message, response.status_code)

        if not isinstance(body, dict):
            raise ProviderError(
                self.provider,
                f"{self.provider.value} returned a non-JSON response",
                response.status_code,
            )
        return body

    def _error_detail(self, body: dict | None) -> str | None:
        """Extracts the provider's own error message from a failure body."""
        return None

    @staticmethod
    def _parse_json(response: httpx.Response):
        try:
            return response.json()
        except ValueError:
            return None
