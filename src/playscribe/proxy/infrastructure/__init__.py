"""Infrastructure layer exports."""

from .assemblyai_client import AssemblyAIClient
from .deepgram_client import DeepgramClient
from .elevenlabs_client import ElevenLabsClient
from .jwt_verifier import JWTTokenVerifier

__all__ = ["AssemblyAIClient", "DeepgramClient", "ElevenLabsClient", "JWTTokenVerifier"]
