"""Domain layer exports."""

from .audio_payload import encode_audio, read_audio_file, resolve_media_type
from .job_poller import JobPoller
from .models import (
    AdapterFailure,
    CanonicalTranscript,
    CanonicalUtterance,
    JobPollState,
    JobStatus,
    ProviderFailure,
    ProviderOutcome,
    ProviderSuccess,
    RecordingMessage,
    TranscriptionResult,
)
from .transcript_builder import TranscriptBuilder

__all__ = [
    "encode_audio",
    "read_audio_file",
    "resolve_media_type",
    "JobPoller",
    "AdapterFailure",
    "CanonicalTranscript",
    "CanonicalUtterance",
    "JobPollState",
    "JobStatus",
    "ProviderFailure",
    "ProviderOutcome",
    "ProviderSuccess",
    "RecordingMessage",
    "TranscriptionResult",
    "TranscriptBuilder",
]
