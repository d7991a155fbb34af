from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy.types import DateTime
from sqlmodel import Field, SQLModel


class ThirdPartyRequest(SQLModel, table=True):
    __tablename__ = "third_party_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    request_id: str = Field(max_length=64, unique=True, index=True)
    user_id: str = Field(max_length=255, index=True)
    provider: str = Field(max_length=32)
    request_type: str = Field(max_length=64)
    data_hash: str | None = Field(default=None, max_length=64)
    created_at: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True), index=True)
