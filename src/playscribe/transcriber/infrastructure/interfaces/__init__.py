"""Infrastructure interface exports."""

from .message_broker import DeliveryCallback, MessageBroker
from .proxy_gateway import ProxyGateway
from .storage_client import StorageClient
from .transcription_adapter import TranscriptionAdapter

__all__ = [
    "DeliveryCallback",
    "MessageBroker",
    "ProxyGateway",
    "StorageClient",
    "TranscriptionAdapter",
]
