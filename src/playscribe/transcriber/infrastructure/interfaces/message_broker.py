"""Abstract interface for the recording event bus."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

# (body, delivery_tag, headers)
DeliveryCallback = Callable[[bytes, int, dict[str, Any] | None], None]


class MessageBroker(ABC):
    """Delivers recording events and carries transcription events back out."""

    @abstractmethod
    def declare_topology(self) -> None:
        """Declares the exchanges and queues the transcriber reads and writes."""

    @abstractmethod
    def consume(self, on_delivery: DeliveryCallback) -> None:
        """Blocks, handing every delivery to ``on_delivery`` until the channel closes."""

    @abstractmethod
    def publish(self, routing_key: str, payload: dict) -> None:
        """
        Raises:
            EventPublishError: If the event does not reach the exchange.
        """

    @abstractmethod
    def acknowledge(self, delivery_tag: int) -> None:
        pass

    @abstractmethod
    def requeue(self, delivery_tag: int) -> None:
        """Returns a delivery for another attempt, within the queue's delivery limit."""

    @abstractmethod
    def dead_letter(self, delivery_tag: int) -> None:
        """Moves a delivery that can never succeed straight to the dead letter queue."""
