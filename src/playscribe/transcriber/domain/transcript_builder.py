"""Core business logic for transcript building."""

import os

from .models import CanonicalTranscript


class TranscriptBuilder:
    """Builds formatted transcripts from canonical transcripts."""

    def build(
        self, transcript: CanonicalTranscript, audio_file_name: str
    ) -> tuple[str, str]:
        """
        Builds a formatted transcript and derives the output path.

        Args:
            transcript: Canonical transcript from the orchestrator.
            audio_file_name: Original audio file path.

        Returns:
            Tuple of (transcript_text, transcription_object_name).
        """
        transcript_text = self._format(transcript)
        object_name = self._derive_path(audio_file_name)
        return transcript_text, object_name

    def _format(self, transcript: CanonicalTranscript) -> str:
        """One numbered line per utterance: ``[01] speaker_0 | 0.00-0.90 | text``."""
        return "\n".join(
            f"[{i:02d}] speaker_{u.speaker_index} | "
            f"{u.start_offset_ms:.2f}-{u.end_offset_ms:.2f} | {u.text}"
            for i, u in enumerate(transcript.utterances, start=1)
        )

    def _derive_path(self, audio_file_name: str) -> str:
        """Converts audio path to transcription path."""
        name = audio_file_name.replace("/audio/", "/transcription/")
        return os.path.splitext(name)[0] + ".txt"
