"""Provider adapter exports."""

from .assemblyai_adapter import AssemblyAIAdapter
from .deepgram_adapter import DeepgramAdapter
from .elevenlabs_adapter import ElevenLabsAdapter

__all__ = ["AssemblyAIAdapter", "DeepgramAdapter", "ElevenLabsAdapter"]
