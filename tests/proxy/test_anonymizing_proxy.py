import asyncio
from datetime import timedelta

import pytest

from playscribe.common import (
    AuthenticationError,
    PayloadValidationError,
    Provider,
    ProviderError,
    ProviderNotConfiguredError,
)
from playscribe.proxy.config import ProviderCredentials
from playscribe.proxy.exceptions import UnsupportedOperationError
from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.proxy.infrastructure import JWTTokenVerifier
from playscribe.proxy.infrastructure.interfaces import RequestAuditStore

from conftest import JWT_SECRET, USER_ID


@pytest.mark.asyncio
async def test_forward_records_before_calling_provider(proxy, provider_clients, token, payload, audit_rows):
    client = provider_clients[Provider.ELEVENLABS]

    result = await proxy.forward(token, Provider.ELEVENLABS, payload)

    assert result == {"words": [], "text": "hello"}
    rows = audit_rows()
    assert len(rows) == 1
    assert rows[0].user_id == USER_ID
    assert rows[0].provider == "elevenlabs"
    # the provider only ever sees the minted request id
    sent_payload, request_id = client.calls[0]
    assert request_id == rows[0].request_id
    assert USER_ID not in request_id
    assert sent_payload is payload


@pytest.mark.asyncio
async def test_invalid_token_reaches_no_provider(proxy, provider_clients, make_token, payload, audit_rows):
    bad_token = make_token(secret="wrong-secret")

    with pytest.raises(AuthenticationError):
        await proxy.forward(bad_token, Provider.DEEPGRAM, payload)

    assert provider_clients[Provider.DEEPGRAM].calls == []
    assert audit_rows() == []


@pytest.mark.asyncio
async def test_unconfigured_provider_fails_fast(audit_store, provider_clients, token, payload, audit_rows):
    proxy = AnonymizingProxy(
        verifier=JWTTokenVerifier(JWT_SECRET),
        audit_store=audit_store,
        clients=provider_clients,
        credentials=ProviderCredentials(deepgram_api_key="dg-key"),
    )

    with pytest.raises(ProviderNotConfiguredError, match="elevenlabs service not configured"):
        await proxy.forward(token, Provider.ELEVENLABS, payload)

    assert provider_clients[Provider.ELEVENLABS].calls == []
    assert audit_rows() == []


@pytest.mark.asyncio
async def test_provider_failure_still_leaves_one_record(proxy, provider_clients, token, payload, audit_rows):
    provider_clients[Provider.DEEPGRAM].error = ProviderError(Provider.DEEPGRAM, "Bad audio", 400)

    with pytest.raises(ProviderError, match="Bad audio"):
        await proxy.forward(token, Provider.DEEPGRAM, payload)

    assert len(audit_rows()) == 1


@pytest.mark.asyncio
async def test_empty_payload_is_rejected_before_recording(proxy, token, audit_rows):
    with pytest.raises(PayloadValidationError):
        await proxy.forward(token, Provider.DEEPGRAM, None)

    assert audit_rows() == []


@pytest.mark.asyncio
async def test_forward_to_job_provider_is_unsupported(proxy, token, payload, audit_rows):
    with pytest.raises(UnsupportedOperationError):
        await proxy.forward(token, Provider.ASSEMBLYAI, payload)

    assert audit_rows() == []


@pytest.mark.asyncio
async def test_submit_job_returns_job_and_request_ids(proxy, provider_clients, token, payload, audit_rows):
    job = await proxy.submit_job(token, Provider.ASSEMBLYAI, payload)

    rows = audit_rows()
    assert job.job_id == "job-1"
    assert job.request_id == rows[0].request_id
    assert provider_clients[Provider.ASSEMBLYAI].submissions[0][1] == job.request_id


@pytest.mark.asyncio
async def test_poll_job_is_authenticated_but_not_recorded(proxy, provider_clients, token, audit_rows):
    status = await proxy.poll_job(token, Provider.ASSEMBLYAI, "job-1")

    assert status["status"] == "completed"
    assert provider_clients[Provider.ASSEMBLYAI].status_checks == ["job-1"]
    assert audit_rows() == []

    with pytest.raises(AuthenticationError):
        await proxy.poll_job("garbage", Provider.ASSEMBLYAI, "job-1")


class _ListAuditStore(RequestAuditStore):
    def __init__(self):
        self.records = []

    async def create_record(self, record):
        await asyncio.sleep(0)
        self.records.append(record)

    async def purge_expired(self, now):
        return 0


@pytest.mark.asyncio
async def test_concurrent_calls_by_same_user_get_distinct_request_ids(
    provider_clients, credentials, token, payload
):
    store = _ListAuditStore()
    proxy = AnonymizingProxy(
        verifier=JWTTokenVerifier(JWT_SECRET),
        audit_store=store,
        clients=provider_clients,
        credentials=credentials,
    )

    await asyncio.gather(
        *(proxy.forward(token, Provider.ELEVENLABS, payload) for _ in range(10))
    )

    request_ids = [record.request_id for record in store.records]
    assert len(set(request_ids)) == 10
    assert all(record.internal_user_id == USER_ID for record in store.records)
    sent_ids = [request_id for _, request_id in provider_clients[Provider.ELEVENLABS].calls]
    assert sorted(sent_ids) == sorted(request_ids)


def test_capabilities_report_configured_providers(audit_store, provider_clients):
    proxy = AnonymizingProxy(
        verifier=JWTTokenVerifier(JWT_SECRET),
        audit_store=audit_store,
        clients=provider_clients,
        credentials=ProviderCredentials(assemblyai_api_key="aai-key"),
        retention=timedelta(hours=1),
    )

    assert proxy.capabilities() == {
        Provider.ELEVENLABS: False,
        Provider.DEEPGRAM: False,
        Provider.ASSEMBLYAI: True,
    }
    assert proxy.is_job_provider(Provider.ASSEMBLYAI)
    assert not proxy.is_job_provider(Provider.DEEPGRAM)
