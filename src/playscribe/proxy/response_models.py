"""Response models for the transcription proxy API."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Advisory capability report: which providers have credentials."""

    status: str
    services: dict[str, bool]
    available: list[str]
    anonymization: str = "enabled"


class JobSubmittedResponse(BaseModel):
    """Returned when a job-based provider accepts a recording."""

    transcription_id: str
    request_id: str = Field(serialization_alias="requestId")
