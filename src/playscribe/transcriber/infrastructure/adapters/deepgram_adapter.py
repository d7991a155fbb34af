"""Utterance-level adapter for Deepgram."""

from playscribe.common import AudioPayload, Provider, ProviderError
from playscribe.transcriber.domain.models import CanonicalUtterance
from playscribe.transcriber.domain.normalizers import flat_text_utterance, parse_speaker_id

from .base import ProxyTranscriptionAdapter


class DeepgramAdapter(ProxyTranscriptionAdapter):
    """Passes Deepgram's diarized utterances through to the canonical shape."""

    name = "Deepgram"
    provider = Provider.DEEPGRAM

    async def _transcribe(self, payload: AudioPayload) -> list[CanonicalUtterance]:
        body = await self._gateway.forward(self.provider, payload)
        return normalize_deepgram(body)


def normalize_deepgram(body: dict) -> list[CanonicalUtterance]:
    """
    Normalizes a Deepgram listen response.

    ``results.utterances`` (or a top-level ``utterances``) map one to one.
    Otherwise the first channel's transcript becomes one speaker-0 utterance.

    Raises:
        ProviderError: If the response holds neither utterances nor a transcript.
    """
    results = body.get("results") or {}
    utterances = results.get("utterances", body.get("utterances"))

    if utterances is not None:
        return [
            CanonicalUtterance(
                speaker_index=parse_speaker_id(u.get("speaker")),
                text=u["transcript"],
                start_offset_ms=float(u.get("start") or 0),
                end_offset_ms=float(u.get("end") or 0),
            )
            for u in utterances
            if (u.get("transcript") or "").strip()
        ]

    try:
        transcript = results["channels"][0]["alternatives"][0]["transcript"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError(
            Provider.DEEPGRAM, "Deepgram response contained no transcript"
        ) from e
    return flat_text_utterance(transcript)
