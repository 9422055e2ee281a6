"""Service layer components powering the API."""

from .summarizer import SummaryService
from .transcriber import TranscriptionService
from .translator import TranslationService

__all__ = [
    "SummaryService",
    "TranscriptionService",
    "TranslationService",
]
