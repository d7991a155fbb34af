"""Queue consumer that turns recording events into stored transcripts."""

import asyncio
from typing import Any

from pydantic import ValidationError

from playscribe.common import RabbitMQConfig, setup_logging
from playscribe.transcriber.domain import RecordingMessage, TranscriptionResult
from playscribe.transcriber.handlers import RecordingMessageHandler
from playscribe.transcriber.infrastructure.interfaces import MessageBroker

logger = setup_logging()


def _completion_event(result: TranscriptionResult) -> dict:
    return {
        "file_name": result.transcription_object_name,
        "bucket_name": result.bucket_name,
        "content_type": result.content_type,
        "provider": result.provider.value,
    }


class Worker:
    """
    Settles every delivery in one of three ways.

    A transcript that was stored and announced is acknowledged. A recording
    whose transcription failed is requeued, so the queue's delivery limit
    decides when it is dead-lettered. An event that cannot be read is
    dead-lettered straight away since no retry can fix it.

    pika delivers on a blocking thread, so each recording runs to completion on
    the worker's own event loop before the next delivery is taken.
    """

    def __init__(
        self,
        broker: MessageBroker,
        handler: RecordingMessageHandler,
        config: RabbitMQConfig,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._broker = broker
        self._handler = handler
        self._queue_config = config.queue_config
        self._loop = loop or asyncio.new_event_loop()

    def start(self) -> None:
        logger.info("Waiting for recording events", extra={"queue": self._queue_config.name})
        try:
            self._broker.consume(self.handle_delivery)
        finally:
            self._loop.close()

    def handle_delivery(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        message = self._read_event(body)
        if message is None:
            self._broker.dead_letter(delivery_tag)
            return

        context = {
            "file_name": message.file_name,
            # quorum queues count earlier deliveries only
            "attempt": (headers or {}).get("x-delivery-count", 0) + 1,
            "max_attempts": self._queue_config.max_delivery_count,
        }
        logger.info("Transcribing recording", extra=context)

        try:
            result = self._loop.run_until_complete(self._handler.process(message))
            self._broker.publish(
                self._queue_config.success_routing_key, _completion_event(result)
            )
        except Exception:
            logger.exception("Recording not transcribed, requeueing", extra=context)
            self._broker.requeue(delivery_tag)
            return

        self._broker.acknowledge(delivery_tag)
        logger.info(
            "Transcript stored",
            extra={
                **context,
                "transcript": result.transcription_object_name,
                "provider": result.provider.value,
            },
        )

    @staticmethod
    def _read_event(body: bytes) -> RecordingMessage | None:
        try:
            return RecordingMessage.model_validate_json(body)
        except ValidationError as e:
            logger.warning(
                "Unreadable recording event, dead-lettering",
                extra={"errors": e.error_count()},
            )
            return None
