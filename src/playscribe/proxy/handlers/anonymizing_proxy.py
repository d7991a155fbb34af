"""Handler brokering transcription calls to external providers."""

from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone

from playscribe.common import (
    AudioPayload,
    Provider,
    ProviderNotConfiguredError,
    setup_logging,
    validate_audio_payload,
)
from playscribe.proxy.config import ProviderCredentials
from playscribe.proxy.domain import SubmittedJob, mint_request_record
from playscribe.proxy.exceptions import UnsupportedOperationError
from playscribe.proxy.infrastructure.interfaces import (
    JobProviderClient,
    ProviderClient,
    RequestAuditStore,
    TokenVerifier,
)

logger = setup_logging()

REQUEST_TYPE_TRANSCRIPTION = "transcription"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnonymizingProxy:
    """
    The only holder of provider credentials and the only caller of providers.

    Every outbound call is preceded by token verification, a configuration
    check, and a persisted audit record. The provider sees the minted request
    id and nothing else about the caller. Responses are returned raw.
    """

    def __init__(
        self,
        verifier: TokenVerifier,
        audit_store: RequestAuditStore,
        clients: Mapping[Provider, ProviderClient | JobProviderClient],
        credentials: ProviderCredentials,
        retention: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._verifier = verifier
        self._audit_store = audit_store
        self._clients = dict(clients)
        self._credentials = credentials
        self._retention = retention
        self._clock = clock

    async def forward(self, token: str, provider: Provider, payload: AudioPayload) -> dict:
        """
        Sends a recording to a single-call provider.

        Returns:
            The provider's raw JSON response.

        Raises:
            AuthenticationError: If the token is invalid.
            PayloadValidationError: If the payload is empty.
            ProviderNotConfiguredError: If the provider has no credentials.
            UnsupportedOperationError: If the provider only accepts jobs.
            ProviderError: If the provider answers with a failure status.
            ProviderNetworkError: If the provider cannot be reached.
        """
        user_id, client = self._prepare(token, provider, payload, ProviderClient, "forward")
        request_id = await self._record(user_id, provider, payload)
        return await client.transcribe(payload, request_id)

    async def submit_job(
        self, token: str, provider: Provider, payload: AudioPayload
    ) -> SubmittedJob:
        """Submits a recording to a job-based provider and returns its job id."""
        user_id, client = self._prepare(
            token, provider, payload, JobProviderClient, "submit_job"
        )
        request_id = await self._record(user_id, provider, payload)
        job_id = await client.submit(payload, request_id)
        return SubmittedJob(job_id=job_id, request_id=request_id)

    async def poll_job(self, token: str, provider: Provider, job_id: str) -> dict:
        """
        Fetches the raw status of a submitted job.

        A status check is a follow-up of an already audited submission, so no
        new record is minted.
        """
        self._verifier.verify(token)
        client = self._client_for(provider, JobProviderClient, "poll_job")
        return await client.fetch_status(job_id)

    def capabilities(self) -> dict[Provider, bool]:
        """Reports, per provider, whether credentials are configured."""
        return {provider: self._is_available(provider) for provider in Provider}

    def is_job_provider(self, provider: Provider) -> bool:
        return isinstance(self._clients.get(provider), JobProviderClient)

    def _prepare(
        self,
        token: str,
        provider: Provider,
        payload: AudioPayload,
        shape: type,
        operation: str,
    ):
        user_id = self._verifier.verify(token)
        validate_audio_payload(payload)
        return user_id, self._client_for(provider, shape, operation)

    def _client_for(self, provider: Provider, shape: type, operation: str):
        if not self._is_available(provider):
            logger.warning(
                "Provider not configured", extra={"provider": provider.value}
            )
            raise ProviderNotConfiguredError(provider)

        client = self._clients[provider]
        if not isinstance(client, shape):
            raise UnsupportedOperationError(provider, operation)
        return client

    async def _record(
        self, user_id: str, provider: Provider, payload: AudioPayload
    ) -> str:
        """Mints and persists the audit record for one outbound call."""
        record = mint_request_record(
            user_id=user_id,
            provider=provider,
            request_type=REQUEST_TYPE_TRANSCRIPTION,
            payload=payload,
            retention=self._retention,
            now=self._clock(),
        )
        await self._audit_store.create_record(record)
        logger.info(
            "Forwarding anonymized request",
            extra={"request_id": record.request_id, "provider": provider.value},
        )
        return record.request_id

    def _is_available(self, provider: Provider) -> bool:
        return provider in self._clients and self._credentials.is_configured(provider)
