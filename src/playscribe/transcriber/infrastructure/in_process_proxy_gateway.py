"""ProxyGateway calling an AnonymizingProxy in the same process."""

from playscribe.common import AudioPayload, Provider, ProviderError
from playscribe.proxy.exceptions import AuditPersistenceError, UnsupportedOperationError
from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.transcriber.infrastructure.interfaces import ProxyGateway


class InProcessProxyGateway(ProxyGateway):
    """Binds a caller's token to a local proxy instance."""

    def __init__(self, proxy: AnonymizingProxy, access_token: str):
        self._proxy = proxy
        self._access_token = access_token

    async def forward(self, provider: Provider, payload: AudioPayload) -> dict:
        try:
            return await self._proxy.forward(self._access_token, provider, payload)
        except (UnsupportedOperationError, AuditPersistenceError) as e:
            raise ProviderError(provider, str(e), cause=e) from e

    async def submit_job(self, provider: Provider, payload: AudioPayload) -> str:
        try:
            job = await self._proxy.submit_job(self._access_token, provider, payload)
        except (UnsupportedOperationError, AuditPersistenceError) as e:
            raise ProviderError(provider, str(e), cause=e) from e
        return job.job_id

    async def poll_job(self, provider: Provider, job_id: str) -> dict:
        try:
            return await self._proxy.poll_job(self._access_token, provider, job_id)
        except UnsupportedOperationError as e:
            raise ProviderError(provider, str(e), cause=e) from e

    async def capabilities(self) -> dict[Provider, bool]:
        return self._proxy.capabilities()
