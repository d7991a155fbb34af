"""Conversion of captured recordings into transport-ready payloads."""

import os
from pathlib import Path

from playscribe.common import AudioPayload
from playscribe.common.models import DEFAULT_MEDIA_TYPE

CONTENT_TYPE_MAP = {
    ".m4a": "audio/x-m4a",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".webm": "audio/webm",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".mp4": "audio/mp4",
}


def resolve_media_type(media_type: str | None = None, file_name: str | None = None) -> str:
    """
    Picks the media type for a recording.

    An explicit tag wins, with codec parameters dropped
    (``audio/webm;codecs=opus`` becomes ``audio/webm``). Otherwise the file
    extension decides, and unknown recordings default to ``audio/webm``.
    """
    if media_type:
        return media_type.split(";", 1)[0].strip().lower() or DEFAULT_MEDIA_TYPE
    if file_name:
        extension = os.path.splitext(file_name)[1].lower()
        return CONTENT_TYPE_MAP.get(extension, DEFAULT_MEDIA_TYPE)
    return DEFAULT_MEDIA_TYPE


def encode_audio(
    data: bytes, media_type: str | None = None, file_name: str | None = None
) -> AudioPayload:
    """
    Wraps raw recording bytes in an AudioPayload.

    Raises:
        PayloadValidationError: If ``data`` is empty.
    """
    return AudioPayload(content=data, media_type=resolve_media_type(media_type, file_name))


def read_audio_file(path: str | Path) -> AudioPayload:
    path = Path(path)
    return encode_audio(path.read_bytes(), file_name=path.name)
