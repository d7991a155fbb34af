"""Value types shared by the proxy and transcriber services."""

import base64
import binascii
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from playscribe.common.exceptions import PayloadValidationError
from playscribe.common.types import Provider

MEDIA_TYPE_EXTENSIONS = {
    "audio/x-m4a": "m4a",
    "audio/m4a": "m4a",
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/webm": "webm",
    "audio/aac": "aac",
    "audio/ogg": "ogg",
    "audio/mp4": "mp4",
}
DEFAULT_MEDIA_TYPE = "audio/webm"


def validate_audio_payload(payload: "AudioPayload | None") -> None:
    """
    Rejects missing or empty audio before it can reach any provider.

    Raises:
        PayloadValidationError: If the payload is absent, of the wrong type,
            empty, or declares a size that does not match its content.
    """
    if payload is None:
        raise PayloadValidationError("no audio data provided")
    if not isinstance(payload, AudioPayload):
        raise PayloadValidationError("invalid audio format")
    if not payload.content or payload.size_bytes <= 0:
        raise PayloadValidationError("audio recording is empty")
    if payload.size_bytes != len(payload.content):
        raise PayloadValidationError(
            f"declared size {payload.size_bytes} does not match "
            f"{len(payload.content)} bytes of content"
        )


class AudioPayload(BaseModel, frozen=True):
    """A complete recording ready for transport to the proxy."""

    content: bytes = Field(repr=False)
    media_type: str = DEFAULT_MEDIA_TYPE
    size_bytes: int

    @model_validator(mode="before")
    @classmethod
    def _derive_size(cls, data):
        if isinstance(data, dict) and "size_bytes" not in data:
            content = data.get("content")
            if isinstance(content, (bytes, bytearray)):
                data = {**data, "size_bytes": len(content)}
        return data

    @model_validator(mode="after")
    def _reject_empty(self):
        validate_audio_payload(self)
        return self

    @property
    def extension(self) -> str:
        """File extension matching the declared media type."""
        return MEDIA_TYPE_EXTENSIONS.get(self.media_type, "webm")

    def to_transport(self) -> dict:
        """Encodes the payload as the proxy's JSON request body."""
        return {
            "audioData": base64.b64encode(self.content).decode("ascii"),
            "contentType": self.media_type,
            "audioSize": self.size_bytes,
        }

    @classmethod
    def from_base64(
        cls, audio_data: str, media_type: str = DEFAULT_MEDIA_TYPE
    ) -> "AudioPayload":
        """
        Decodes a base64 transport body back into a payload.

        Raises:
            PayloadValidationError: If the data is not valid base64 or is empty.
        """
        if not audio_data:
            raise PayloadValidationError("no audio data provided")
        try:
            content = base64.b64decode(audio_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise PayloadValidationError("audio data is not valid base64") from e
        return cls(content=content, media_type=media_type or DEFAULT_MEDIA_TYPE)


class AnonymizedRequestRecord(BaseModel, frozen=True):
    """Audit entry linking an opaque provider-facing id to the real caller."""

    request_id: str
    internal_user_id: str
    provider: Provider
    request_type: str
    metadata_hash: str | None = None
    created_at: datetime
    expires_at: datetime
