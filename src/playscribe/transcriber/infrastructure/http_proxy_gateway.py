"""HTTP implementation of the ProxyGateway interface."""

import httpx

from playscribe.common import (
    AudioPayload,
    AuthenticationError,
    Provider,
    ProviderError,
    ProviderNetworkError,
    ProviderNotConfiguredError,
    setup_logging,
)
from playscribe.transcriber.exceptions import ProxyUnavailableError
from playscribe.transcriber.infrastructure.interfaces import ProxyGateway

logger = setup_logging()


class HttpProxyGateway(ProxyGateway):
    """
    Calls the transcription proxy API as one authenticated caller.

    Proxy error statuses map back to the shared typed errors: 401 to
    AuthenticationError, 503 to ProviderNotConfiguredError, 504 and transport
    failures to ProviderNetworkError, anything else to ProviderError.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        access_token: str,
        timeout_seconds: float = 150.0,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = timeout_seconds

    async def forward(self, provider: Provider, payload: AudioPayload) -> dict:
        return await self._request(
            "POST",
            f"/api/transcription/{provider.value}",
            provider,
            json=payload.to_transport(),
        )

    async def submit_job(self, provider: Provider, payload: AudioPayload) -> str:
        body = await self._request(
            "POST",
            f"/api/transcription/{provider.value}",
            provider,
            json=payload.to_transport(),
        )
        job_id = body.get("transcription_id")
        if not job_id:
            raise ProviderError(provider, f"{provider.value} returned no job id")
        return job_id

    async def poll_job(self, provider: Provider, job_id: str) -> dict:
        return await self._request(
            "GET", f"/api/transcription/{provider.value}/jobs/{job_id}", provider
        )

    async def capabilities(self) -> dict[Provider, bool]:
        """
        Raises:
            ProxyUnavailableError: If the health endpoint cannot be read.
        """
        try:
            response = await self._client.get(
                f"{self._base_url}/api/transcription/health", timeout=self._timeout
            )
            response.raise_for_status()
            services = response.json().get("services", {})
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Proxy health check failed")
            raise ProxyUnavailableError("capabilities", e) from e

        known = {p.value for p in Provider}
        return {Provider(name): bool(ok) for name, ok in services.items() if name in known}

    async def _request(self, method: str, path: str, provider: Provider, **kwargs) -> dict:
        try:
            response = await self._client.request(
                method,
                f"{self._base_url}{path}",
                headers={"Authorization": f"Bearer {self._access_token}"},
                timeout=self._timeout,
                **kwargs,
            )
        except httpx.TransportError as e:
            logger.warning(
                "Proxy request failed in transit",
                extra={"provider": provider.value, "error_type": type(e).__name__},
            )
            raise ProviderNetworkError(provider, e) from e

        if response.is_error:
            raise self._error_for(provider, response)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                provider, "Proxy returned a non-JSON response", response.status_code, e
            ) from e

    @staticmethod
    def _error_for(provider: Provider, response: httpx.Response) -> Exception:
        try:
            detail = response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None

        if isinstance(detail, dict):
            message = detail.get("error")
            upstream_status = detail.get("upstream_status")
        else:
            message = detail if isinstance(detail, str) else None
            upstream_status = None
        message = message or f"{provider.value} API error: {response.status_code}"

        if response.status_code == 401:
            return AuthenticationError(message)
        if response.status_code == 503:
            return ProviderNotConfiguredError(provider)
        if response.status_code == 504:
            return ProviderNetworkError(provider)
        return ProviderError(provider, message, upstream_status or response.status_code)
