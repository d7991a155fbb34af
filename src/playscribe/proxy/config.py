"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field

from playscribe.common import Provider


class ProviderCredentials(BaseModel, frozen=True):
    """API keys for each external transcription provider. Empty means disabled."""

    elevenlabs_api_key: str = ""
    deepgram_api_key: str = ""
    assemblyai_api_key: str = ""

    def api_key_for(self, provider: Provider) -> str:
        return getattr(self, f"{provider.value}_api_key")

    def is_configured(self, provider: Provider) -> bool:
        return bool(self.api_key_for(provider))


class ElevenLabsConfig(BaseModel, frozen=True):
    """ElevenLabs Scribe request settings."""

    base_url: str = "https://api.elevenlabs.io"
    model_id: str = "scribe_v1"
    diarization_threshold: float = 0.1
    timeout_seconds: float = 120.0


class DeepgramConfig(BaseModel, frozen=True):
    """Deepgram pre-recorded request settings."""

    base_url: str = "https://api.deepgram.com"
    model: str = "nova-2"
    timeout_seconds: float = 120.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    base_url: str = "https://api.assemblyai.com"
    speaker_labels: bool = True
    speakers_expected: int = 2
    timeout_seconds: float = 60.0


class AuthConfig(BaseModel, frozen=True):
    """Access token verification settings."""

    jwt_secret_key: str
    jwt_algorithm: str = "HS256"


class DatabaseConfig(BaseModel, frozen=True):
    """Audit database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AuditConfig(BaseModel, frozen=True):
    """Retention policy for anonymized request records."""

    retention_hours: int = 24
    purge_interval_seconds: int = 3600


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    credentials: ProviderCredentials
    elevenlabs: ElevenLabsConfig = ElevenLabsConfig()
    deepgram: DeepgramConfig = DeepgramConfig()
    assemblyai: AssemblyAIConfig = AssemblyAIConfig()
    auth: AuthConfig
    database: DatabaseConfig
    audit: AuditConfig = AuditConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        credentials=ProviderCredentials(
            elevenlabs_api_key=os.getenv("ELEVENLABS_API_KEY", ""),
            deepgram_api_key=os.getenv("DEEPGRAM_API_KEY", ""),
            assemblyai_api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        elevenlabs=ElevenLabsConfig(
            model_id=os.getenv("ELEVENLABS_MODEL_ID", "scribe_v1"),
        ),
        deepgram=DeepgramConfig(
            model=os.getenv("DEEPGRAM_MODEL", "nova-2"),
        ),
        assemblyai=AssemblyAIConfig(
            speakers_expected=int(os.getenv("ASSEMBLYAI_SPEAKERS_EXPECTED", "2")),
        ),
        auth=AuthConfig(
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", ""),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        ),
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "playscribe"),
        ),
        audit=AuditConfig(
            retention_hours=int(os.getenv("AUDIT_RETENTION_HOURS", "24")),
            purge_interval_seconds=int(os.getenv("AUDIT_PURGE_INTERVAL_SECONDS", "3600")),
        ),
    )
