"""HTTP gateway for medical translation, transcription and summaries."""
