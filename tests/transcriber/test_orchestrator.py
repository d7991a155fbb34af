import asyncio

import pytest

from playscribe.common import (
    AllProvidersFailedError,
    AudioPayload,
    PayloadValidationError,
    Provider,
    ProviderErrorKind,
)
from playscribe.transcriber.domain import (
    CanonicalTranscript,
    CanonicalUtterance,
    ProviderFailure,
    ProviderSuccess,
)
from playscribe.transcriber.domain.orchestrator import TranscriptionOrchestrator
from playscribe.transcriber.infrastructure.interfaces import TranscriptionAdapter


class StubAdapter(TranscriptionAdapter):
    def __init__(self, name, provider, outcome=None, delay=0.0):
        self.name = name
        self.provider = provider
        self.outcome = outcome
        self.delay = delay
        self.calls = 0

    async def transcribe(self, payload):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.outcome


def _success(provider, text="hello"):
    return ProviderSuccess(
        transcript=CanonicalTranscript(
            provider=provider,
            utterances=(CanonicalUtterance(speaker_index=0, text=text),),
        )
    )


def _failure(message, kind=ProviderErrorKind.PROVIDER_ERROR):
    return ProviderFailure(kind=kind, message=message)


@pytest.fixture
def audio():
    return AudioPayload(content=b"\x01" * 32)


@pytest.mark.asyncio
async def test_empty_payload_invokes_no_adapter():
    adapter = StubAdapter("ElevenLabs", Provider.ELEVENLABS, _success(Provider.ELEVENLABS))
    orchestrator = TranscriptionOrchestrator([adapter])

    with pytest.raises(PayloadValidationError):
        await orchestrator.transcribe(None)

    assert adapter.calls == 0


@pytest.mark.asyncio
async def test_first_success_short_circuits(audio):
    first = StubAdapter("ElevenLabs", Provider.ELEVENLABS, _success(Provider.ELEVENLABS, "one"))
    second = StubAdapter("Deepgram", Provider.DEEPGRAM, _success(Provider.DEEPGRAM, "two"))

    transcript = await TranscriptionOrchestrator([first, second]).transcribe(audio)

    assert transcript.provider == Provider.ELEVENLABS
    assert transcript.utterances[0].text == "one"
    assert second.calls == 0


@pytest.mark.asyncio
async def test_falls_back_in_order(audio):
    first = StubAdapter("ElevenLabs", Provider.ELEVENLABS, _failure("quota exceeded"))
    second = StubAdapter("Deepgram", Provider.DEEPGRAM, _success(Provider.DEEPGRAM))
    third = StubAdapter("AssemblyAI", Provider.ASSEMBLYAI, _success(Provider.ASSEMBLYAI))

    transcript = await TranscriptionOrchestrator([first, second, third]).transcribe(audio)

    assert transcript.provider == Provider.DEEPGRAM
    assert (first.calls, second.calls, third.calls) == (1, 1, 0)


@pytest.mark.asyncio
async def test_all_failures_are_reported_in_order(audio):
    adapters = [
        StubAdapter("ElevenLabs", Provider.ELEVENLABS, _failure("x")),
        StubAdapter("Deepgram", Provider.DEEPGRAM, _failure("y", ProviderErrorKind.NETWORK_ERROR)),
        StubAdapter("AssemblyAI", Provider.ASSEMBLYAI, _failure("z", ProviderErrorKind.TIMEOUT)),
    ]

    with pytest.raises(AllProvidersFailedError) as exc:
        await TranscriptionOrchestrator(adapters).transcribe(audio)

    message = str(exc.value)
    assert message.index("x") < message.index("y") < message.index("z")
    assert [f.adapter_name for f in exc.value.failures] == ["ElevenLabs", "Deepgram", "AssemblyAI"]
    assert [f.kind for f in exc.value.failures] == [
        ProviderErrorKind.PROVIDER_ERROR,
        ProviderErrorKind.NETWORK_ERROR,
        ProviderErrorKind.TIMEOUT,
    ]
    assert all(adapter.calls == 1 for adapter in adapters)


@pytest.mark.asyncio
async def test_no_adapters_fails(audio):
    with pytest.raises(AllProvidersFailedError, match="no adapters configured"):
        await TranscriptionOrchestrator([]).transcribe(audio)


@pytest.mark.asyncio
async def test_request_budget_stops_remaining_adapters(audio):
    slow = StubAdapter("ElevenLabs", Provider.ELEVENLABS, _success(Provider.ELEVENLABS), delay=5)
    never = StubAdapter("Deepgram", Provider.DEEPGRAM, _success(Provider.DEEPGRAM))

    orchestrator = TranscriptionOrchestrator([slow, never], request_timeout_seconds=0.05)
    with pytest.raises(AllProvidersFailedError) as exc:
        await orchestrator.transcribe(audio)

    assert exc.value.failures[0].kind == ProviderErrorKind.TIMEOUT
    assert never.calls == 0


@pytest.mark.asyncio
async def test_with_capabilities_keeps_order_of_configured_providers(audio):
    adapters = [
        StubAdapter("ElevenLabs", Provider.ELEVENLABS, _failure("x")),
        StubAdapter("Deepgram", Provider.DEEPGRAM, _success(Provider.DEEPGRAM)),
        StubAdapter("AssemblyAI", Provider.ASSEMBLYAI, _success(Provider.ASSEMBLYAI)),
    ]
    orchestrator = TranscriptionOrchestrator(adapters).with_capabilities(
        {"assemblyai": True, "deepgram": True, "elevenlabs": False}
    )

    assert [a.name for a in orchestrator.adapters] == ["Deepgram", "AssemblyAI"]
    transcript = await orchestrator.transcribe(audio)
    assert transcript.provider == Provider.DEEPGRAM
    assert adapters[0].calls == 0
