"""Infrastructure layer exports."""

from .adapters import AssemblyAIAdapter, DeepgramAdapter, ElevenLabsAdapter
from .http_proxy_gateway import HttpProxyGateway
from .minio_storage import MinioStorageClient
from .rabbitmq_broker import RabbitMQBroker

__all__ = [
    "AssemblyAIAdapter",
    "DeepgramAdapter",
    "ElevenLabsAdapter",
    "HttpProxyGateway",
    "MinioStorageClient",
    "RabbitMQBroker",
]
