from __future__ import annotations

import logging
from typing import Dict, List, Optional

from openai import NOT_GIVEN, AsyncOpenAI

from ..errors import ProviderResponseError, ValidationError
from ..prompts import AUTO_LANGUAGE, TRANSLATION_PROMPT
from ..provider import call_provider, require_client
from ..schemas import TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)


class TranslationService:
    """Medical-domain translation through a chat-completion model."""

    LABEL = "Translation"

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.3,
        timeout: Optional[float] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.timeout = timeout if timeout is not None else NOT_GIVEN

    @staticmethod
    def build_messages(
        text: str, target_lang: str, source_lang: Optional[str] = None
    ) -> List[Dict[str, str]]:
        instruction = TRANSLATION_PROMPT.format(
            source=source_lang or AUTO_LANGUAGE, target=target_lang
        )
        return [
            {"role": "system", "content": instruction},
            {"role": "user", "content": text},
        ]

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        if not request.text or not request.target_language:
            raise ValidationError("Missing text or targetLanguage")

        client = require_client(self.client)
        messages = self.build_messages(
            request.text, request.target_language, request.source_language
        )
        logger.info(
            "Translating %d chars from '%s' to '%s' with %s",
            len(request.text),
            request.source_language or AUTO_LANGUAGE,
            request.target_language,
            self.model,
        )
        completion = await call_provider(
            self.LABEL,
            client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                timeout=self.timeout,
            ),
        )

        content = completion.choices[0].message.content if completion.choices else None
        if content is None:
            logger.error("Translation error: completion carried no text")
            raise ProviderResponseError(
                "Translation failed", "Provider returned an empty completion."
            )
        return TranslationResult(
            translated_text=content.strip(), original_text=request.text
        )
