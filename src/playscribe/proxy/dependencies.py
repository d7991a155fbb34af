"""Dependency injection configuration for the transcription proxy."""

import asyncio
import contextlib
from contextlib import asynccontextmanager, contextmanager
from datetime import timedelta

import httpx
from sqlmodel import Session, SQLModel, create_engine

from playscribe.common import Provider, setup_logging
from playscribe.proxy.config import load_config
from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.proxy.infrastructure import (
    AssemblyAIClient,
    DeepgramClient,
    ElevenLabsClient,
    JWTTokenVerifier,
)
from playscribe.proxy.repositories import SQLRequestAuditStore
from playscribe.proxy.retention import RetentionSweeper

logger = setup_logging()

_config = load_config()

# PostgreSQL audit store
_db_engine = create_engine(_config.database.url)
SQLModel.metadata.create_all(_db_engine)
logger.info("Audit database initialized", extra={"host": _config.database.host})


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(_db_engine) as session:
        yield session


_audit_store = SQLRequestAuditStore(_session_factory)

# Outbound HTTP, shared by every provider client
_http_client = httpx.AsyncClient()

_credentials = _config.credentials
_clients = {
    Provider.ELEVENLABS: ElevenLabsClient(
        _http_client, _credentials.elevenlabs_api_key, _config.elevenlabs
    ),
    Provider.DEEPGRAM: DeepgramClient(
        _http_client, _credentials.deepgram_api_key, _config.deepgram
    ),
    Provider.ASSEMBLYAI: AssemblyAIClient(
        _http_client, _credentials.assemblyai_api_key, _config.assemblyai
    ),
}

_verifier = JWTTokenVerifier(_config.auth.jwt_secret_key, _config.auth.jwt_algorithm)

_proxy = AnonymizingProxy(
    verifier=_verifier,
    audit_store=_audit_store,
    clients=_clients,
    credentials=_credentials,
    retention=timedelta(hours=_config.audit.retention_hours),
)

_sweeper = RetentionSweeper(_audit_store, _config.audit.purge_interval_seconds)


def get_proxy() -> AnonymizingProxy:
    """Returns the configured anonymizing proxy."""
    return _proxy


@asynccontextmanager
async def lifespan(app):
    """Runs the retention sweep while the app serves and closes outbound connections after."""
    configured = [p.value for p, ok in _proxy.capabilities().items() if ok]
    logger.info("Transcription proxy starting", extra={"configured_providers": configured})

    sweep = asyncio.create_task(_sweeper.run_forever())
    try:
        yield
    finally:
        sweep.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep
        await _http_client.aclose()
