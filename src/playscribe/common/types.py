"""Enumerations shared by the proxy and transcriber services."""

from enum import Enum


class Provider(str, Enum):
    """External speech-to-text backends reachable through the proxy."""

    ELEVENLABS = "elevenlabs"
    DEEPGRAM = "deepgram"
    ASSEMBLYAI = "assemblyai"


class ProviderErrorKind(str, Enum):
    """Why a single provider attempt failed."""

    NOT_CONFIGURED = "not_configured"
    PROVIDER_ERROR = "provider_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    UNAUTHENTICATED = "unauthenticated"
