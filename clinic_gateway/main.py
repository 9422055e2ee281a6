from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI

from .config import Settings, get_settings
from .errors import GatewayError
from .provider import get_openai_client
from .schemas import (
    ErrorResponse,
    SummarizeRequest,
    SummaryResult,
    TranscriptionResult,
    TranslationRequest,
    TranslationResult,
)
from .services import SummaryService, TranscriptionService, TranslationService

logger = logging.getLogger(__name__)
logging.basicConfig(level=get_settings().log_level.upper())

app = FastAPI(
    title="Clinic Gateway",
    description="Medical translation, transcription and conversation summaries backed by OpenAI.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_translator(
    client: Optional[AsyncOpenAI] = Depends(get_openai_client),
    settings: Settings = Depends(get_settings),
) -> TranslationService:
    return TranslationService(
        client,
        model=settings.chat_model,
        temperature=settings.translation_temperature,
        timeout=settings.request_timeout,
    )


def get_transcriber(
    client: Optional[AsyncOpenAI] = Depends(get_openai_client),
    settings: Settings = Depends(get_settings),
) -> TranscriptionService:
    return TranscriptionService(
        client,
        upload_dir=settings.upload_dir,
        model=settings.transcription_model,
        timeout=settings.request_timeout,
    )


def get_summariser(
    client: Optional[AsyncOpenAI] = Depends(get_openai_client),
    settings: Settings = Depends(get_settings),
) -> SummaryService:
    return SummaryService(
        client,
        model=settings.chat_model,
        temperature=settings.summary_temperature,
        timeout=settings.request_timeout,
    )


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


@app.post(
    "/api/translate",
    response_model=TranslationResult,
    response_model_by_alias=True,
    responses=ERROR_RESPONSES,
)
async def translate_text(
    payload: TranslationRequest,
    translator: TranslationService = Depends(get_translator),
) -> TranslationResult:
    return await translator.translate(payload)


@app.post(
    "/api/transcribe",
    response_model=TranscriptionResult,
    responses=ERROR_RESPONSES,
)
async def transcribe_audio(
    audio: Optional[UploadFile] = File(None),
    transcriber: TranscriptionService = Depends(get_transcriber),
) -> TranscriptionResult:
    return await transcriber.transcribe(audio)


@app.post(
    "/api/summarize",
    responses={200: {"model": SummaryResult}, **ERROR_RESPONSES},
)
async def summarize_conversation(
    payload: SummarizeRequest,
    summariser: SummaryService = Depends(get_summariser),
) -> JSONResponse:
    # Forwarded as parsed; no fields added, dropped or reordered.
    summary = await summariser.summarise(payload.messages)
    return JSONResponse(content=summary)


@app.get("/healthz")
async def healthcheck() -> dict:
    return {"status": "ok"}
