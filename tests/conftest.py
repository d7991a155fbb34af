from contextlib import contextmanager
from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from playscribe.common import AudioPayload, Provider
from playscribe.common.db_models import ThirdPartyRequest
from playscribe.proxy.config import ProviderCredentials
from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.proxy.infrastructure import JWTTokenVerifier
from playscribe.proxy.infrastructure.interfaces import JobProviderClient, ProviderClient
from playscribe.proxy.repositories import SQLRequestAuditStore

JWT_SECRET = "test-secret"
USER_ID = "user-42"


class FakeProviderClient(ProviderClient):
    def __init__(self, provider, response=None, error=None):
        self.provider = provider
        self.response = response if response is not None else {"text": "hello"}
        self.error = error
        self.calls = []

    async def transcribe(self, payload, request_id):
        self.calls.append((payload, request_id))
        if self.error:
            raise self.error
        return self.response


class FakeJobClient(JobProviderClient):
    def __init__(self, provider=Provider.ASSEMBLYAI, job_id="job-1", statuses=None):
        self.provider = provider
        self.job_id = job_id
        self.statuses = list(statuses or [{"status": "completed", "text": "done"}])
        self.submissions = []
        self.status_checks = []

    async def submit(self, payload, request_id):
        self.submissions.append((payload, request_id))
        return self.job_id

    async def fetch_status(self, job_id):
        self.status_checks.append(job_id)
        return self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]


@pytest.fixture
def make_token():
    def _make(user_id=USER_ID, secret=JWT_SECRET, **claims):
        return jwt.encode({"userId": user_id, **claims}, secret, algorithm="HS256")

    return _make


@pytest.fixture
def token(make_token):
    return make_token()


@pytest.fixture
def payload():
    return AudioPayload(content=b"\x1a\x45\xdf\xa3" * 100, media_type="audio/webm")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def audit_store(engine):
    @contextmanager
    def session_factory():
        with Session(engine) as session:
            yield session

    return SQLRequestAuditStore(session_factory)


@pytest.fixture
def audit_rows(engine):
    def _rows():
        with Session(engine) as session:
            return session.exec(select(ThirdPartyRequest)).all()

    return _rows


@pytest.fixture
def credentials():
    return ProviderCredentials(
        elevenlabs_api_key="el-key",
        deepgram_api_key="dg-key",
        assemblyai_api_key="aai-key",
    )


@pytest.fixture
def provider_clients():
    return {
        Provider.ELEVENLABS: FakeProviderClient(
            Provider.ELEVENLABS, {"words": [], "text": "hello"}
        ),
        Provider.DEEPGRAM: FakeProviderClient(
            Provider.DEEPGRAM, {"results": {"utterances": []}}
        ),
        Provider.ASSEMBLYAI: FakeJobClient(),
    }


@pytest.fixture
def proxy(audit_store, provider_clients, credentials):
    return AnonymizingProxy(
        verifier=JWTTokenVerifier(JWT_SECRET),
        audit_store=audit_store,
        clients=provider_clients,
        credentials=credentials,
        retention=timedelta(hours=24),
    )
