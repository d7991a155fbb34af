"""Normalization of provider transcription responses into canonical utterances."""

import re
from collections.abc import Iterable
from typing import NamedTuple

from .models import CanonicalUtterance

_SPEAKER_PATTERN = re.compile(r"speaker_(\d+)")

# Hiragana, katakana, CJK ideographs and full-width punctuation.
_CJK = "\u3000-\u303f\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uff00-\uffef"
_CJK_GAP = re.compile(rf"(?<=[{_CJK}])\s+(?=[{_CJK}])")


class WordToken(NamedTuple):
    speaker_index: int
    text: str
    start: float
    end: float


def parse_speaker_id(value) -> int:
    """
    Maps a provider speaker tag to a zero-based index.

    ``speaker_3`` and ``3`` both map to 3. Missing or unrecognised tags map
    to speaker 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    match = _SPEAKER_PATTERN.search(text)
    return int(match.group(1)) if match else 0


def speaker_letter_to_index(label) -> int:
    """
    Maps a single-letter speaker label to its alphabetic position.

    Raises:
        ValueError: If the label is not a single ASCII letter.
    """
    if isinstance(label, int) and not isinstance(label, bool) and label >= 0:
        return label
    text = str(label).strip().upper() if label is not None else ""
    if len(text) != 1 or not ("A" <= text <= "Z"):
        raise ValueError(f"unrecognised speaker label {label!r}")
    return ord(text) - ord("A")


def collapse_cjk_spacing(text: str) -> str:
    """Removes the spaces providers insert between CJK characters."""
    return _CJK_GAP.sub("", text)


def group_word_tokens(tokens: Iterable[WordToken]) -> list[CanonicalUtterance]:
    """
    Merges contiguous same-speaker tokens into utterances.

    Text is joined with single spaces, the utterance starts at its first token
    and ends at its last. A speaker change closes the current utterance.
    """
    utterances = []
    speaker = None
    words: list[str] = []
    start = end = 0.0

    for token in tokens:
        text = token.text.strip()
        if not text:
            continue
        if token.speaker_index != speaker:
            if words:
                utterances.append(_utterance(speaker, words, start, end))
            speaker, words, start = token.speaker_index, [], token.start
        words.append(text)
        end = token.end

    if words:
        utterances.append(_utterance(speaker, words, start, end))
    return utterances


def flat_text_utterance(text: str | None) -> list[CanonicalUtterance]:
    """A single speaker-0 utterance with unknown timing, or nothing for blank text."""
    text = collapse_cjk_spacing((text or "").strip())
    if not text:
        return []
    return [CanonicalUtterance(speaker_index=0, text=text)]


def _utterance(speaker: int, words: list[str], start: float, end: float) -> CanonicalUtterance:
    return CanonicalUtterance(
        speaker_index=speaker,
        text=collapse_cjk_spacing(" ".join(words)),
        start_offset_ms=start,
        end_offset_ms=max(end, start),
    )
