"""RabbitMQ implementation of the MessageBroker interface."""

import json

import pika
from pika.channel import Channel
from pika.exceptions import AMQPError

from playscribe.common import EventPublishError, QueueConfig, RabbitMQConfig, setup_logging
from playscribe.transcriber.infrastructure.interfaces import DeliveryCallback, MessageBroker

logger = setup_logging()

_PERSISTENT_JSON = pika.BasicProperties(
    content_type="application/json",
    delivery_mode=pika.DeliveryMode.Persistent,
)


class RabbitMQBroker(MessageBroker):
    """
    Takes recording events off a quorum queue and publishes transcription events.

    Requeued deliveries come back until the queue's delivery limit sends them
    to the dead letter queue; ``dead_letter`` sends them there at once.
    """

    def __init__(self, channel: Channel, config: RabbitMQConfig):
        self._channel = channel
        self._config = config

    def publish(self, routing_key: str, payload: dict) -> None:
        try:
            self._channel.basic_publish(
                exchange=self._config.exchange_name,
                routing_key=routing_key,
                body=json.dumps(payload),
                properties=_PERSISTENT_JSON,
            )
        except AMQPError as e:
            logger.exception("Failed to publish event", extra={"routing_key": routing_key})
            raise EventPublishError(routing_key, cause=e) from e

        logger.info("Event published", extra={"routing_key": routing_key})

    def acknowledge(self, delivery_tag: int) -> None:
        self._channel.basic_ack(delivery_tag=delivery_tag)

    def requeue(self, delivery_tag: int) -> None:
        self._channel.basic_nack(delivery_tag=delivery_tag, requeue=True)

    def dead_letter(self, delivery_tag: int) -> None:
        self._channel.basic_nack(delivery_tag=delivery_tag, requeue=False)

    def consume(self, on_delivery: DeliveryCallback) -> None:
        queue = self._config.queue_config.name

        def on_message(ch, method, properties, body):
            on_delivery(body, method.delivery_tag, properties.headers if properties else None)

        self._channel.basic_qos(prefetch_count=self._config.queue_config.prefetch_count)
        self._channel.basic_consume(queue=queue, on_message_callback=on_message)
        logger.info("Started consuming", extra={"queue": queue})
        self._channel.start_consuming()

    def declare_topology(self) -> None:
        queue_config = self._config.queue_config
        self._declare_dead_letter_queue(queue_config)
        self._declare_recording_queue(queue_config)
        logger.info(
            "Queue infrastructure ready",
            extra={"queue": queue_config.name, "dlq": queue_config.dlq_name},
        )

    def _declare_dead_letter_queue(self, queue_config: QueueConfig) -> None:
        self._channel.exchange_declare(
            exchange=queue_config.dlq_exchange_name, exchange_type="direct", durable=True
        )
        self._channel.queue_declare(queue=queue_config.dlq_name, durable=True)
        self._channel.queue_bind(
            queue=queue_config.dlq_name,
            exchange=queue_config.dlq_exchange_name,
            routing_key=queue_config.dlq_routing_key,
        )

    def _declare_recording_queue(self, queue_config: QueueConfig) -> None:
        self._channel.exchange_declare(
            exchange=self._config.exchange_name, exchange_type="topic", durable=True
        )
        self._channel.queue_declare(
            queue=queue_config.name,
            durable=True,
            arguments={
                "x-queue-type": queue_config.queue_type,
                "x-delivery-limit": queue_config.max_delivery_count,
                "x-dead-letter-exchange": queue_config.dlq_exchange_name,
                "x-dead-letter-routing-key": queue_config.dlq_routing_key,
            },
        )
        self._channel.queue_bind(
            queue=queue_config.name,
            exchange=self._config.exchange_name,
            routing_key=queue_config.expected_routing_key,
        )
