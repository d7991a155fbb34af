import json

import httpx
import pytest
import respx
from httpx import Response

from playscribe.common import AudioPayload, Provider, ProviderError, ProviderNetworkError
from playscribe.proxy.config import AssemblyAIConfig, DeepgramConfig, ElevenLabsConfig
from playscribe.proxy.infrastructure import AssemblyAIClient, DeepgramClient, ElevenLabsClient

REQUEST_ID = "req_abc_0123456789abcdef0123456789abcdef"


@pytest.fixture
def audio():
    return AudioPayload(content=b"RIFF0000WAVE", media_type="audio/wav")


@pytest.mark.asyncio
@respx.mock
async def test_elevenlabs_uploads_file_named_after_request_id(audio):
    route = respx.route(
        method="POST", host="api.elevenlabs.io", path="/v1/speech-to-text"
    ).mock(return_value=Response(200, json={"text": "hi", "words": []}))

    async with httpx.AsyncClient() as http:
        client = ElevenLabsClient(http, "el-key", ElevenLabsConfig())
        result = await client.transcribe(audio, REQUEST_ID)

    assert result == {"text": "hi", "words": []}
    request = route.calls.last.request
    assert request.headers["xi-api-key"] == "el-key"
    assert request.url.params["include_timestamps"] == "true"
    body = request.content.decode("latin-1")
    assert f'filename="{REQUEST_ID}.wav"' in body
    assert 'name="model_id"' in body and "scribe_v1" in body
    assert 'name="diarize"' in body


@pytest.mark.asyncio
@respx.mock
async def test_elevenlabs_error_uses_provider_message(audio):
    respx.route(method="POST", host="api.elevenlabs.io", path="/v1/speech-to-text").mock(
        return_value=Response(401, json={"detail": {"message": "Invalid API key"}})
    )

    async with httpx.AsyncClient() as http:
        client = ElevenLabsClient(http, "bad", ElevenLabsConfig())
        with pytest.raises(ProviderError) as exc:
            await client.transcribe(audio, REQUEST_ID)

    assert exc.value.message == "Invalid API key"
    assert exc.value.status_code == 401
    assert exc.value.provider == Provider.ELEVENLABS


@pytest.mark.asyncio
@respx.mock
async def test_elevenlabs_generic_error_without_detail(audio):
    respx.route(method="POST", host="api.elevenlabs.io", path="/v1/speech-to-text").mock(
        return_value=Response(500, text="boom")
    )

    async with httpx.AsyncClient() as http:
        client = ElevenLabsClient(http, "el-key", ElevenLabsConfig())
        with pytest.raises(ProviderError, match="elevenlabs API error: 500"):
            await client.transcribe(audio, REQUEST_ID)


@pytest.mark.asyncio
@respx.mock
async def test_network_failure_is_distinct_from_provider_error(audio):
    respx.route(method="POST", host="api.deepgram.com", path="/v1/listen").mock(
        side_effect=httpx.ConnectTimeout
    )

    async with httpx.AsyncClient() as http:
        client = DeepgramClient(http, "dg-key", DeepgramConfig())
        with pytest.raises(ProviderNetworkError):
            await client.transcribe(audio, REQUEST_ID)


@pytest.mark.asyncio
@respx.mock
async def test_deepgram_sends_raw_audio_with_token_auth(audio):
    route = respx.route(method="POST", host="api.deepgram.com", path="/v1/listen").mock(
        return_value=Response(200, json={"results": {"utterances": []}})
    )

    async with httpx.AsyncClient() as http:
        client = DeepgramClient(http, "dg-key", DeepgramConfig())
        await client.transcribe(audio, REQUEST_ID)

    request = route.calls.last.request
    assert request.headers["Authorization"] == "Token dg-key"
    assert request.headers["Content-Type"] == "audio/wav"
    assert request.content == b"RIFF0000WAVE"
    assert request.url.params["model"] == "nova-2"
    assert request.url.params["diarize"] == "true"
    assert request.url.params["utterances"] == "true"


@pytest.mark.asyncio
@respx.mock
async def test_deepgram_error_uses_err_msg(audio):
    respx.route(method="POST", host="api.deepgram.com", path="/v1/listen").mock(
        return_value=Response(400, json={"err_msg": "Bad audio"})
    )

    async with httpx.AsyncClient() as http:
        client = DeepgramClient(http, "dg-key", DeepgramConfig())
        with pytest.raises(ProviderError, match="Bad audio"):
            await client.transcribe(audio, REQUEST_ID)


@pytest.mark.asyncio
@respx.mock
async def test_assemblyai_submit_uploads_then_requests_transcript(audio):
    upload = respx.post("https://api.assemblyai.com/v2/upload").mock(
        return_value=Response(200, json={"upload_url": "https://cdn.assemblyai.com/u/1"})
    )
    transcript = respx.post("https://api.assemblyai.com/v2/transcript").mock(
        return_value=Response(200, json={"id": "tx-9", "status": "queued"})
    )

    async with httpx.AsyncClient() as http:
        client = AssemblyAIClient(http, "aai-key", AssemblyAIConfig())
        job_id = await client.submit(audio, REQUEST_ID)

    assert job_id == "tx-9"
    assert upload.calls.last.request.headers["Authorization"] == "aai-key"
    assert upload.calls.last.request.content == b"RIFF0000WAVE"
    body = json.loads(transcript.calls.last.request.content)
    assert body == {
        "audio_url": "https://cdn.assemblyai.com/u/1",
        "speaker_labels": True,
        "speakers_expected": 2,
    }


@pytest.mark.asyncio
@respx.mock
async def test_assemblyai_upload_without_url_fails(audio):
    respx.post("https://api.assemblyai.com/v2/upload").mock(
        return_value=Response(200, json={})
    )

    async with httpx.AsyncClient() as http:
        client = AssemblyAIClient(http, "aai-key", AssemblyAIConfig())
        with pytest.raises(ProviderError, match="upload_url"):
            await client.submit(audio, REQUEST_ID)


@pytest.mark.asyncio
@respx.mock
async def test_assemblyai_fetch_status_returns_raw_document():
    respx.get("https://api.assemblyai.com/v2/transcript/tx-9").mock(
        return_value=Response(200, json={"id": "tx-9", "status": "processing"})
    )

    async with httpx.AsyncClient() as http:
        client = AssemblyAIClient(http, "aai-key", AssemblyAIConfig())
        status = await client.fetch_status("tx-9")

    assert status == {"id": "tx-9", "status": "processing"}
