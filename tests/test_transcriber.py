import asyncio
import io

import pytest
from fastapi import UploadFile

from clinic_gateway.errors import ProviderError, ValidationError
from clinic_gateway.services.transcriber import TranscriptionService
from clinic_gateway.services.uploads import persist_upload, staged_upload


AUDIO = b"RIFF\x00\x00\x00\x00WAVEfmt "


def _upload(filename="visit.wav", data=AUDIO):
    return UploadFile(file=io.BytesIO(data), filename=filename)


def test_persist_upload_keeps_extension(tmp_path):
    path = persist_upload(_upload("visit.m4a"), tmp_path / "uploads")

    assert path.parent == tmp_path / "uploads"
    assert path.suffix == ".m4a"
    assert path.read_bytes() == AUDIO


def test_persist_upload_without_extension_uses_tmp(tmp_path):
    path = persist_upload(_upload("recording"), tmp_path)

    assert path.suffix == ".tmp"


def test_staged_upload_removes_file_when_block_raises(tmp_path):
    with pytest.raises(RuntimeError):
        with staged_upload(_upload(), tmp_path) as path:
            assert path.exists()
            raise RuntimeError("boom")

    assert not path.exists()


def test_transcribe_returns_text_and_cleans_up(fake_openai, tmp_path):
    fake_openai.audio.transcriptions.text = "patient reports fever"
    service = TranscriptionService(fake_openai, upload_dir=tmp_path, model="whisper-1")

    result = asyncio.run(service.transcribe(_upload()))

    transcriptions = fake_openai.audio.transcriptions
    assert result.text == "patient reports fever"
    assert transcriptions.calls[0]["model"] == "whisper-1"
    assert transcriptions.received == AUDIO
    assert transcriptions.staged_existed
    assert not transcriptions.staged_path.exists()


def test_transcribe_cleans_up_after_provider_failure(fake_openai, tmp_path):
    fake_openai.audio.transcriptions.error = RuntimeError("invalid file format")
    service = TranscriptionService(fake_openai, upload_dir=tmp_path)

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(service.transcribe(_upload()))

    assert excinfo.value.message == "Transcription failed"
    assert excinfo.value.details == "invalid file format"
    assert not fake_openai.audio.transcriptions.staged_path.exists()
    assert list(tmp_path.iterdir()) == []


def test_transcribe_requires_an_upload(fake_openai, tmp_path):
    service = TranscriptionService(fake_openai, upload_dir=tmp_path)

    with pytest.raises(ValidationError):
        asyncio.run(service.transcribe(None))

    assert fake_openai.audio.transcriptions.calls == []
