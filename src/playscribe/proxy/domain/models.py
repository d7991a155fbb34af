"""Domain models for the transcription proxy."""

from pydantic import BaseModel


class SubmittedJob(BaseModel, frozen=True):
    """A job accepted by an asynchronous provider."""

    job_id: str
    request_id: str
