import argparse
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .capabilities import HostSpeechRecognizer, HostSpeechSynthesizer, SpeechRecognizer, SpeechSynthesizer
from .config import CoachSettings
from .errors import CoachError, NoSpeechError
from .host_client import SpeechHostClient
from .i18n import i18n
from .logging import setup_coach_logging
from .practice import AttemptLog, PronunciationPractice
from .scoring import accuracy_tier, analyze
from .speech import SPEECH_LANGUAGE_CODES, speech_language_code

logger = logging.getLogger("pronunciation_coach.app")


class AnalyzeRequest(BaseModel):
    target: str = ""
    recognized: str = ""
    feedback_language: Optional[str] = None


class AttemptRequest(BaseModel):
    target: str = Field(min_length=1)
    audio_path: str = Field(min_length=1)
    vocabulary_id: Optional[str] = None
    # speech language of the recording; feedback_language picks the message catalog
    language: Optional[str] = None
    feedback_language: Optional[str] = None


class DemonstrateRequest(BaseModel):
    text: str = Field(min_length=1)
    language: Optional[str] = None


def _ok(data: Any) -> dict[str, Any]:
    return {"code": 200, "message": "success", "data": data}


def create_app(
    settings: Optional[CoachSettings] = None,
    *,
    recognizer: Optional[SpeechRecognizer] = None,
    synthesizer: Optional[SpeechSynthesizer] = None,
    host_client: Optional[SpeechHostClient] = None,
) -> FastAPI:
    settings = settings or CoachSettings.from_env()
    owns_client = host_client is None and (recognizer is None or synthesizer is None)
    if owns_client:
        host_client = SpeechHostClient(settings.host_url, settings.client_id, settings.timeout)
    if recognizer is None:
        recognizer = HostSpeechRecognizer(host_client)
    if synthesizer is None:
        synthesizer = HostSpeechSynthesizer(host_client)

    attempt_log = AttemptLog(settings.max_attempts)

    def practice_for(language: Optional[str], feedback_language: Optional[str] = None) -> PronunciationPractice:
        return PronunciationPractice(
            recognizer,
            synthesizer,
            language=(language or settings.language).lower(),
            feedback_language=(feedback_language or settings.feedback_language).lower(),
            attempt_log=attempt_log,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info(f"{settings.app_name} v{__version__} ready, speech host {settings.host_url}")
        yield
        if owns_client and host_client is not None:
            await host_client.close()

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.attempt_log = attempt_log

    api_router = APIRouter(prefix="/api")

    @api_router.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @api_router.get("/info")
    async def info() -> dict[str, Any]:
        return {
            "status": "ok",
            "name": settings.app_name,
            "version": __version__,
            "language": settings.language,
            "feedback_languages": i18n.languages,
        }

    @api_router.post("/pronunciation/analyze")
    async def pronunciation_analyze(request: AnalyzeRequest) -> dict[str, Any]:
        result = analyze(
            request.target,
            request.recognized,
            language=request.feedback_language or settings.feedback_language,
        )
        payload = result.to_payload()
        payload["tier"] = accuracy_tier(result.accuracy).value
        return _ok(payload)

    @api_router.post("/pronunciation/attempts")
    async def pronunciation_attempt(request: AttemptRequest) -> dict[str, Any]:
        practice = practice_for(request.language, request.feedback_language)
        try:
            attempt = await practice.attempt(
                request.target,
                request.audio_path,
                vocabulary_id=request.vocabulary_id,
            )
        except NoSpeechError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        except CoachError as e:
            logger.error(f"attempt failed: {e}")
            raise HTTPException(status_code=502, detail=str(e)) from e
        payload = attempt.to_payload()
        payload["tier"] = accuracy_tier(attempt.accuracy).value
        return _ok(payload)

    @api_router.get("/pronunciation/attempts")
    async def pronunciation_attempts(vocabulary_id: Optional[str] = None) -> dict[str, Any]:
        attempts = await attempt_log.list(vocabulary_id)
        return _ok({"attempts": [a.to_payload() for a in attempts], "count": len(attempts)})

    @api_router.get("/pronunciation/attempts/today")
    async def pronunciation_attempts_today() -> dict[str, Any]:
        attempts = await attempt_log.today()
        return _ok({"attempts": [a.to_payload() for a in attempts], "count": len(attempts)})

    @api_router.post("/speech/demonstrate")
    async def speech_demonstrate(request: DemonstrateRequest) -> dict[str, Any]:
        practice = practice_for(request.language)
        try:
            result = await practice.demonstrate(request.text)
        except CoachError as e:
            logger.error(f"demonstrate failed: {e}")
            raise HTTPException(status_code=502, detail=str(e)) from e
        return _ok(result.model_dump())

    @api_router.get("/speech/languages")
    async def speech_languages() -> dict[str, Any]:
        return _ok(
            {
                "languages": dict(SPEECH_LANGUAGE_CODES),
                "default": speech_language_code(settings.language),
            }
        )

    app.include_router(api_router)
    return app


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args, _ = parser.parse_known_args()

    settings = CoachSettings.from_env()
    setup_coach_logging(settings.log_level, log_dir=settings.log_dir)
    app = create_app(settings)

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


if __name__ in {"__main__", "__mp_main__"}:
    main()
