"""Handler layer exports."""

from .recording_message_handler import RecordingMessageHandler

__all__ = ["RecordingMessageHandler"]
