"""Domain models for the transcription service."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from playscribe.common import Provider, ProviderErrorKind


class CanonicalUtterance(BaseModel, frozen=True):
    """
    One speaker-attributed stretch of speech.

    Offsets are carried exactly as the provider reports them.
    """

    speaker_index: int = Field(ge=0)
    text: str
    start_offset_ms: float = Field(default=0, ge=0)
    end_offset_ms: float = Field(default=0, ge=0)

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("utterance text must not be empty")
        return value

    @model_validator(mode="after")
    def _check_offsets(self):
        if self.end_offset_ms < self.start_offset_ms:
            raise ValueError("utterance ends before it starts")
        return self


class CanonicalTranscript(BaseModel, frozen=True):
    """Provider-agnostic transcript: utterances in chronological order."""

    provider: Provider
    utterances: tuple[CanonicalUtterance, ...] = ()

    @field_validator("utterances")
    @classmethod
    def _order_by_start(cls, value: tuple[CanonicalUtterance, ...]):
        return tuple(sorted(value, key=lambda u: u.start_offset_ms))

    @property
    def speaker_count(self) -> int:
        return len({u.speaker_index for u in self.utterances})

    @property
    def is_empty(self) -> bool:
        return not self.utterances


class ProviderSuccess(BaseModel, frozen=True):
    transcript: CanonicalTranscript


class ProviderFailure(BaseModel, frozen=True):
    kind: ProviderErrorKind
    message: str


ProviderOutcome = ProviderSuccess | ProviderFailure


class AdapterFailure(BaseModel, frozen=True):
    """Why one adapter did not produce a transcript, as recorded by the orchestrator."""

    adapter_name: str
    provider: Provider
    kind: ProviderErrorKind
    message: str


class JobStatus(str, Enum):
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


_TERMINAL = {JobStatus.COMPLETED, JobStatus.FAILED}


class JobPollState(BaseModel, frozen=True):
    """
    Snapshot of an asynchronous provider job.

    Transitions go through ``advance`` (a status document was received) and
    ``record_attempt`` (a status check failed in transit). Completed and failed
    states are terminal: advancing them returns them unchanged.
    """

    job_id: str
    status: JobStatus = JobStatus.SUBMITTED
    attempts_made: int = Field(default=0, ge=0)
    max_attempts: int = Field(gt=0)
    poll_interval_ms: int = Field(ge=0)
    deadline: float | None = None
    result: dict | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_attempts(self):
        if self.attempts_made > self.max_attempts:
            raise ValueError("attempts_made exceeds max_attempts")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.status in _TERMINAL

    @property
    def is_exhausted(self) -> bool:
        return self.attempts_made >= self.max_attempts

    def advance(self, body: dict) -> "JobPollState":
        """Returns the state after one status check answered with ``body``."""
        if self.is_terminal:
            return self

        attempts = self.attempts_made + 1
        status = body.get("status")

        if status == "completed":
            return self.model_copy(
                update={
                    "status": JobStatus.COMPLETED,
                    "attempts_made": attempts,
                    "result": body,
                }
            )
        if status == "error":
            return self.model_copy(
                update={
                    "status": JobStatus.FAILED,
                    "attempts_made": attempts,
                    "error": body.get("error") or "Transcription failed",
                }
            )
        # queued, processing and anything unrecognised keep the job running
        return self.model_copy(
            update={"status": JobStatus.PROCESSING, "attempts_made": attempts}
        )

    def record_attempt(self) -> "JobPollState":
        """Counts a status check that produced no answer."""
        if self.is_terminal:
            return self
        return self.model_copy(
            update={"status": JobStatus.PROCESSING, "attempts_made": self.attempts_made + 1}
        )


class RecordingMessage(BaseModel, frozen=True):
    """Represents an incoming recording upload completed event."""

    file_name: str
    bucket_name: str
    access_token: str = Field(repr=False)
    content_type: str | None = None


class TranscriptionResult(BaseModel, frozen=True):
    """Result of a transcription operation."""

    transcription_object_name: str
    bucket_name: str
    provider: Provider
    content_type: str = "text/plain"
