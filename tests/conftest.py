from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from clinic_gateway.config import Settings, get_settings
from clinic_gateway.provider import get_openai_client


class FakeChatCompletions:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.content: Optional[str] = ""
        self.error: Optional[Exception] = None

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeTranscriptions:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.text = ""
        self.error: Optional[Exception] = None
        self.staged_path: Optional[Path] = None
        self.staged_existed = False
        self.received = b""

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        audio_file = kwargs["file"]
        self.staged_path = Path(audio_file.name)
        self.staged_existed = self.staged_path.exists()
        self.received = audio_file.read()
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeOpenAI:
    """Stands in for ``AsyncOpenAI``; only the calls the services make."""

    def __init__(self) -> None:
        self.chat = SimpleNamespace(completions=FakeChatCompletions())
        self.audio = SimpleNamespace(transcriptions=FakeTranscriptions())


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="test-key",
        upload_dir=tmp_path / "uploads",
        request_timeout=5.0,
    )


@pytest.fixture
def client(fake_openai: FakeOpenAI, settings: Settings):
    from clinic_gateway.main import app

    app.dependency_overrides[get_openai_client] = lambda: fake_openai
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
