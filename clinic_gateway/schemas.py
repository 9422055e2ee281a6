from typing import Any, List, Optional

from pydantic import BaseModel, Field


class TranslationRequest(BaseModel):
    text: Optional[str] = Field(default=None, description="Text to translate.")
    target_language: Optional[str] = Field(
        default=None,
        alias="targetLanguage",
        description="Language to translate into.",
    )
    source_language: Optional[str] = Field(
        default=None,
        alias="sourceLanguage",
        description="Language of the input; detected by the model when omitted.",
    )

    class Config:
        populate_by_name = True


class TranslationResult(BaseModel):
    translated_text: str = Field(alias="translatedText")
    original_text: str = Field(
        alias="originalText", description="Input echoed back for client-side diffing."
    )

    class Config:
        populate_by_name = True


class TranscriptionResult(BaseModel):
    text: str = Field(description="Plain-text transcript of the upload.")


class ConversationMessage(BaseModel):
    sender_role: Any = Field(
        default=None, alias="senderRole", description="Speaker role, e.g. doctor."
    )
    original_text: Any = Field(
        default=None, alias="originalText", description="What was said."
    )

    class Config:
        populate_by_name = True

    def render(self) -> str:
        role = "" if self.sender_role is None else str(self.sender_role)
        text = "" if self.original_text is None else str(self.original_text)
        return f"{role}: {text}"


class SummarizeRequest(BaseModel):
    # Checked by the summary service so a non-list is a 400, not a 422.
    messages: Optional[Any] = Field(
        default=None, description="Ordered conversation turns."
    )


class SummaryResult(BaseModel):
    """Documented shape of the summary; replies are forwarded verbatim."""

    summary: str = Field(description="Brief narrative summary of the consultation.")
    symptoms: List[str] = Field(description="Symptoms mentioned.")
    diagnoses: List[str] = Field(description="Diagnoses discussed.")
    medications: List[str] = Field(description="Medications prescribed with dosages.")
    followups: List[str] = Field(description="Instructions or next steps.")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
