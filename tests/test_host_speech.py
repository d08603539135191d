import json
import math

import pytest

from pronunciation_coach.capabilities import HostSpeechRecognizer, HostSpeechSynthesizer
from pronunciation_coach.capabilities.host_speech import ASR_TOOL, TTS_TOOL
from pronunciation_coach.errors import HostConnectionError, RecognitionError, SynthesisError


class _FakeClient:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def call_tool(self, tool_name, arguments=None, timeout=120.0, on_progress=None):
        _ = (timeout, on_progress)
        self.calls.append((tool_name, arguments or {}))
        if self.error is not None:
            raise self.error
        return self.responses[tool_name]


@pytest.mark.asyncio
async def test_recognizer_uses_word_probabilities_for_confidence():
    client = _FakeClient(
        {
            ASR_TOOL: {
                "code": 200,
                "message": "success",
                "data": {
                    "text": " Hello ",
                    "language": "en",
                    "segments": [
                        {
                            "text": "Hello",
                            "avg_logprob": -0.2,
                            "words": [{"word": "Hello", "probability": 0.8}, {"word": "there", "probability": 0.6}],
                        }
                    ],
                },
            }
        }
    )
    recognizer = HostSpeechRecognizer(client, model_size="base")
    result = await recognizer.recognize("/tmp/attempt.wav", language="en", beam_size=5, unknown="x")

    assert result.transcript == "Hello"
    assert result.confidence == pytest.approx(0.7)
    assert result.language == "en"

    tool_name, args = client.calls[0]
    assert tool_name == ASR_TOOL
    assert args["audio_path"] == "/tmp/attempt.wav"
    assert args["model_size"] == "base"
    assert args["beam_size"] == 5
    assert "unknown" not in args


@pytest.mark.asyncio
async def test_recognizer_falls_back_to_segment_logprob_and_text():
    client = _FakeClient(
        {
            ASR_TOOL: {
                "code": 200,
                "message": "success",
                "data": {"segments": [{"text": "good", "avg_logprob": -0.5}, {"text": "morning", "avg_logprob": -0.1}]},
            }
        }
    )
    result = await HostSpeechRecognizer(client).recognize("/tmp/a.wav")
    assert result.transcript == "good morning"
    assert result.confidence == pytest.approx(math.exp(-0.3))
    assert "language" not in client.calls[0][1]


@pytest.mark.asyncio
async def test_recognizer_raises_on_failed_envelope():
    client = _FakeClient({ASR_TOOL: {"code": 500, "message": "asr down", "data": {"error_code": "ENGINE"}}})
    with pytest.raises(RecognitionError, match=r"asr down \(ENGINE\)"):
        await HostSpeechRecognizer(client).recognize("/tmp/a.wav")


@pytest.mark.asyncio
async def test_recognizer_maps_host_errors():
    client = _FakeClient(error=HostConnectionError("refused"))
    with pytest.raises(RecognitionError):
        await HostSpeechRecognizer(client).recognize("/tmp/a.wav")


@pytest.mark.asyncio
async def test_synthesizer_returns_output_path():
    client = _FakeClient({TTS_TOOL: {"code": 200, "message": "success", "data": {"output_path": "/tmp/cat.wav"}}})
    synthesizer = HostSpeechSynthesizer(client, voice="alloy")
    result = await synthesizer.speak("cat", language="en-US", speed=0.8)

    assert result.output_path == "/tmp/cat.wav"
    assert result.language == "en-US"
    assert client.calls[0] == (TTS_TOOL, {"text": "cat", "language": "en-US", "speaker": "alloy", "speed": 0.8})


@pytest.mark.asyncio
async def test_synthesizer_rejects_blank_text_and_failures():
    client = _FakeClient({TTS_TOOL: {"code": 503, "message": "tts busy", "data": None}})
    synthesizer = HostSpeechSynthesizer(client)
    with pytest.raises(SynthesisError):
        await synthesizer.speak("   ")
    with pytest.raises(SynthesisError, match="tts busy"):
        await synthesizer.speak("cat")


@pytest.mark.asyncio
async def test_recognizer_reads_host_wrapped_text_content():
    inner = {"code": 200, "message": "success", "data": {"text": "rock", "language": "en", "segments": []}}
    outer = {"code": 200, "message": "success", "data": inner}
    client = _FakeClient({ASR_TOOL: [{"type": "text", "text": json.dumps(outer)}]})
    result = await HostSpeechRecognizer(client).recognize("/tmp/a.wav", language="en")
    assert result.transcript == "rock"
    assert result.confidence is None
