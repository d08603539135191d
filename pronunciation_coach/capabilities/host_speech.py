from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import CoachError, RecognitionError, SynthesisError, map_host_error
from ..host_client import SpeechHostClient
from ..models import RecognitionResult, SynthesisResult
from ..result_utils import ensure_envelope, envelope_error
from .recognizer import SpeechRecognizer
from .synthesizer import SpeechSynthesizer

logger = logging.getLogger("pronunciation_coach.capabilities")

ASR_TOOL = "asr.transcribe"
TTS_TOOL = "tts.synthesize"
ASR_RESULT_FIELDS = ("text", "segments")
TTS_RESULT_FIELDS = ("output_path",)


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _confidence_from_segments(segments: list[Any]) -> Optional[float]:
    word_probs: list[float] = []
    logprobs: list[float] = []
    for seg in segments:
        if not isinstance(seg, dict):
            continue
        for w in seg.get("words") or []:
            if isinstance(w, dict) and isinstance(w.get("probability"), (int, float)):
                word_probs.append(float(w["probability"]))
        if isinstance(seg.get("avg_logprob"), (int, float)):
            logprobs.append(float(seg["avg_logprob"]))

    if word_probs:
        return _clamp_unit(sum(word_probs) / len(word_probs))
    if logprobs:
        return _clamp_unit(math.exp(sum(logprobs) / len(logprobs)))
    return None


@dataclass(frozen=True)
class HostSpeechRecognizer(SpeechRecognizer):
    client: SpeechHostClient
    model_size: Optional[str] = None
    vad_filter: bool = True

    async def recognize(self, audio_path: str, language: str | None = None, **kwargs: Any) -> RecognitionResult:
        allowed = {"model_size", "vad_filter", "initial_prompt", "hotwords", "temperature", "beam_size"}
        forwarded = {k: v for k, v in (kwargs or {}).items() if k in allowed and v is not None}
        args: dict[str, Any] = {
            "audio_path": audio_path,
            "vad_filter": forwarded.pop("vad_filter", self.vad_filter),
            "word_timestamps": True,
            "output_format": "segments",
        }
        model_size = forwarded.pop("model_size", self.model_size)
        if model_size:
            args["model_size"] = model_size
        if language:
            args["language"] = language
        args.update(forwarded)

        try:
            raw = await self.client.call_tool(ASR_TOOL, arguments=args)
        except CoachError as e:
            raise map_host_error(e, RecognitionError) from e

        envelope = ensure_envelope(raw, *ASR_RESULT_FIELDS)
        if envelope.get("code") != 200:
            raise RecognitionError(envelope_error(envelope, "asr failed"))

        raw_data = envelope.get("data")
        data: dict[str, Any] = raw_data if isinstance(raw_data, dict) else {}
        segments = [s for s in (data.get("segments") or []) if isinstance(s, dict)]

        transcript = (data.get("text") or "").strip()
        if not transcript and segments:
            transcript = " ".join((s.get("text") or "").strip() for s in segments).strip()

        result = RecognitionResult(
            transcript=transcript,
            confidence=_confidence_from_segments(segments),
            language=data.get("language") or language,
        )
        logger.info(
            f"recognized audio={audio_path} chars={len(result.transcript)} confidence={result.confidence}"
        )
        return result


@dataclass(frozen=True)
class HostSpeechSynthesizer(SpeechSynthesizer):
    client: SpeechHostClient
    voice: Optional[str] = None
    speed: Optional[float] = None

    async def speak(self, text: str, language: str | None = None, **kwargs: Any) -> SynthesisResult:
        if not (text or "").strip():
            raise SynthesisError("nothing to synthesize")

        args: dict[str, Any] = {"text": text}
        if language:
            args["language"] = language
        voice = kwargs.get("voice") or self.voice
        if voice:
            args["speaker"] = voice
        speed = kwargs.get("speed", self.speed)
        if speed is not None:
            args["speed"] = speed

        try:
            raw = await self.client.call_tool(TTS_TOOL, arguments=args)
        except CoachError as e:
            raise map_host_error(e, SynthesisError) from e

        envelope = ensure_envelope(raw, *TTS_RESULT_FIELDS)
        if envelope.get("code") != 200:
            raise SynthesisError(envelope_error(envelope, "tts failed"))

        data = envelope.get("data")
        output_path = None
        if isinstance(data, dict):
            output_path = str(data.get("output_path") or "").strip() or None
        return SynthesisResult(text=text, language=language, output_path=output_path)
