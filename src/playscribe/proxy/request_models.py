"""Request bodies accepted by the transcription proxy API."""

from pydantic import BaseModel, ConfigDict, Field

from playscribe.common import AudioPayload, PayloadValidationError
from playscribe.common.models import DEFAULT_MEDIA_TYPE


class TranscriptionRequest(BaseModel):
    """Base64 transport body produced by ``AudioPayload.to_transport``."""

    model_config = ConfigDict(populate_by_name=True)

    audio_data: str = Field(default="", alias="audioData")
    content_type: str = Field(default=DEFAULT_MEDIA_TYPE, alias="contentType")
    audio_size: int | None = Field(default=None, alias="audioSize")

    def to_payload(self) -> AudioPayload:
        """
        Decodes the body into an AudioPayload.

        Raises:
            PayloadValidationError: If the audio is missing, not base64, empty,
                or does not match the declared size.
        """
        payload = AudioPayload.from_base64(self.audio_data, self.content_type)
        if self.audio_size is not None and self.audio_size != payload.size_bytes:
            raise PayloadValidationError(
                f"declared size {self.audio_size} does not match "
                f"{payload.size_bytes} bytes of content"
            )
        return payload
