from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from openai import NOT_GIVEN, AsyncOpenAI

from ..errors import ProviderResponseError, ValidationError
from ..provider import call_provider, require_client
from ..schemas import TranscriptionResult
from .uploads import staged_upload

logger = logging.getLogger(__name__)


class TranscriptionService:
    """Speech-to-text for a single uploaded audio file."""

    LABEL = "Transcription"

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        upload_dir: Path,
        model: str = "whisper-1",
        timeout: Optional[float] = None,
    ) -> None:
        self.client = client
        self.upload_dir = Path(upload_dir)
        self.model = model
        self.timeout = timeout if timeout is not None else NOT_GIVEN

    async def transcribe_file(self, audio_path: Path) -> TranscriptionResult:
        client = require_client(self.client)
        audio_path = Path(audio_path)
        logger.info(
            "Transcribing %s (%d bytes) with %s",
            audio_path.name,
            audio_path.stat().st_size,
            self.model,
        )
        with audio_path.open("rb") as audio_file:
            transcription = await call_provider(
                self.LABEL,
                client.audio.transcriptions.create(
                    file=audio_file,
                    model=self.model,
                    timeout=self.timeout,
                ),
            )

        text = getattr(transcription, "text", None)
        if text is None:
            logger.error("Transcription error: response carried no text")
            raise ProviderResponseError(
                "Transcription failed", "Provider returned no transcript text."
            )
        return TranscriptionResult(text=text)

    async def transcribe(self, upload: Optional[UploadFile]) -> TranscriptionResult:
        if upload is None:
            raise ValidationError("No audio file provided")

        with staged_upload(upload, self.upload_dir) as audio_path:
            return await self.transcribe_file(audio_path)
