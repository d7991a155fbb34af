"""Word-level diarized adapter for ElevenLabs Scribe."""

from playscribe.common import AudioPayload, Provider, ProviderError
from playscribe.transcriber.domain.models import CanonicalUtterance
from playscribe.transcriber.domain.normalizers import (
    WordToken,
    flat_text_utterance,
    group_word_tokens,
    parse_speaker_id,
)

from .base import ProxyTranscriptionAdapter

_SKIPPED_TOKEN_TYPES = {"spacing", "audio_event"}


class ElevenLabsAdapter(ProxyTranscriptionAdapter):
    """Groups ElevenLabs word tokens into speaker turns."""

    name = "ElevenLabs"
    provider = Provider.ELEVENLABS

    async def _transcribe(self, payload: AudioPayload) -> list[CanonicalUtterance]:
        body = await self._gateway.forward(self.provider, payload)
        return normalize_elevenlabs(body)


def normalize_elevenlabs(body: dict) -> list[CanonicalUtterance]:
    """
    Normalizes an ElevenLabs speech-to-text response.

    Word tokens are grouped by speaker. Without tokens the flat ``text`` becomes
    one speaker-0 utterance; blank text means no speech.

    Raises:
        ProviderError: If the response carries neither ``words`` nor ``text``.
    """
    if not isinstance(body, dict) or ("words" not in body and "text" not in body):
        raise ProviderError(
            Provider.ELEVENLABS, "ElevenLabs response contained no transcript"
        )

    tokens = [
        WordToken(
            speaker_index=parse_speaker_id(word.get("speaker_id")),
            text=word.get("text") or "",
            start=float(word.get("start") or 0),
            end=float(word.get("end") or 0),
        )
        for word in body.get("words") or []
        if word.get("type", "word") not in _SKIPPED_TOKEN_TYPES
    ]
    utterances = group_word_tokens(tokens)
    if utterances:
        return utterances
    return flat_text_utterance(body.get("text"))
