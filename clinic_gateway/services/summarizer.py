from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from openai import NOT_GIVEN, AsyncOpenAI

from ..errors import ProviderResponseError, ValidationError
from ..prompts import SUMMARY_PROMPT
from ..provider import call_provider, require_client
from ..schemas import ConversationMessage

logger = logging.getLogger(__name__)


class SummaryService:
    """Extract a structured medical summary from a doctor-patient conversation."""

    LABEL = "Summarization"

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.5,
        timeout: Optional[float] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.timeout = timeout if timeout is not None else NOT_GIVEN

    @staticmethod
    def parse_messages(raw: Any) -> List[ConversationMessage]:
        if not isinstance(raw, list):
            raise ValidationError("Invalid messages format")
        # Entries are rendered as given; missing fields become empty.
        return [
            ConversationMessage.model_validate(item)
            if isinstance(item, dict)
            else ConversationMessage()
            for item in raw
        ]

    @staticmethod
    def build_transcript(messages: Iterable[ConversationMessage]) -> str:
        return "\n".join(message.render() for message in messages)

    @staticmethod
    def _parse_summary(content: Optional[str]) -> Dict[str, Any]:
        if content is None:
            raise ProviderResponseError(
                "Summarization failed", "Provider returned an empty completion."
            )
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ProviderResponseError("Summarization failed", str(exc)) from exc
        if not isinstance(payload, dict):
            raise ProviderResponseError(
                "Summarization failed",
                f"Expected a JSON object, got {type(payload).__name__}.",
            )
        return payload

    async def summarise(self, raw_messages: Any) -> Dict[str, Any]:
        messages = self.parse_messages(raw_messages)
        transcript = self.build_transcript(messages)
        client = require_client(self.client)

        logger.info(
            "Summarising %d messages (%d chars) with %s",
            len(messages),
            len(transcript),
            self.model,
        )
        completion = await call_provider(
            self.LABEL,
            client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SUMMARY_PROMPT},
                    {"role": "user", "content": transcript},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
                timeout=self.timeout,
            ),
        )

        content = completion.choices[0].message.content if completion.choices else None
        try:
            return self._parse_summary(content)
        except ProviderResponseError as exc:
            logger.error("Summarization error: %s", exc.details)
            raise
