"""Connection settings for the object store and message broker."""

from pydantic import BaseModel, Field


class MinioConfig(BaseModel, frozen=True):
    """Where recordings and transcripts are stored."""

    endpoint: str
    user: str
    password: str
    secure: bool = False
    bucket_name: str = "recordings"


class QueueConfig(BaseModel, frozen=True):
    """
    A consumer queue bound to the events exchange.

    Quorum queues count deliveries; past ``max_delivery_count`` a message goes to
    the dead letter queue.
    """

    name: str
    expected_routing_key: str
    success_routing_key: str
    dlq_name: str
    dlq_routing_key: str
    dlq_exchange_name: str = "dead_letter_exchange"
    queue_type: str = "quorum"
    max_delivery_count: int = Field(default=3, gt=0)
    prefetch_count: int = Field(default=1, gt=0)


class RabbitMQConfig(BaseModel, frozen=True):
    host: str
    user: str
    password: str
    port: int = 5672
    heartbeat_seconds: int = 0
    exchange_name: str = "events"
    queue_config: QueueConfig | None = None
