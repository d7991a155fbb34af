"""Dependency injection configuration for the transcriber service."""

import httpx
import pika
from minio import Minio

from playscribe.common import setup_logging
from playscribe.transcriber.config import load_config
from playscribe.transcriber.domain import TranscriptBuilder
from playscribe.transcriber.handlers import RecordingMessageHandler
from playscribe.transcriber.infrastructure import (
    HttpProxyGateway,
    MinioStorageClient,
    RabbitMQBroker,
)
from playscribe.transcriber.infrastructure.interfaces import ProxyGateway
from playscribe.transcriber.pipeline import build_orchestrator
from playscribe.transcriber.worker import Worker

logger = setup_logging()

_config = load_config()

# MinIO setup
_minio_client = Minio(
    endpoint=_config.minio.endpoint,
    access_key=_config.minio.user,
    secret_key=_config.minio.password,
    secure=_config.minio.secure,
)

_storage = MinioStorageClient(_minio_client)
_storage.ensure_bucket_exists(_config.minio.bucket_name)

# RabbitMQ setup
_credentials = pika.PlainCredentials(_config.rabbitmq.user, _config.rabbitmq.password)
_parameters = pika.ConnectionParameters(
    host=_config.rabbitmq.host,
    port=_config.rabbitmq.port,
    credentials=_credentials,
    heartbeat=_config.rabbitmq.heartbeat_seconds,
)
_rabbit_connection = pika.BlockingConnection(_parameters)
_rabbit_channel = _rabbit_connection.channel()

_broker = RabbitMQBroker(_rabbit_channel, _config.rabbitmq)
_broker.declare_topology()

# Proxy client, one connection pool for every message
_http_client = httpx.AsyncClient()


def _gateway_for(access_token: str) -> ProxyGateway:
    return HttpProxyGateway(
        _http_client,
        _config.proxy.base_url,
        access_token,
        timeout_seconds=_config.proxy.timeout_seconds,
    )


def get_handler() -> RecordingMessageHandler:
    """Returns the configured recording message handler."""
    return RecordingMessageHandler(
        _storage,
        gateway_factory=_gateway_for,
        orchestrator_factory=lambda gateway: build_orchestrator(gateway, _config),
        transcript_builder=TranscriptBuilder(),
        prefilter_capabilities=_config.transcription.prefilter_capabilities,
    )


def get_worker() -> Worker:
    """Returns the configured worker."""
    return Worker(_broker, get_handler(), _config.rabbitmq)
