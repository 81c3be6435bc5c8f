"""Shared pytest fixtures for PromptPix tests."""

import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from promptpix.api.main import app, get_image_provider
from promptpix.core.config import PromptPixConfig
from promptpix.core.provider import ImageProvider, ProviderImage
from promptpix.ui.models import GeneratedImage, GeneratorViewState


class FakeProvider(ImageProvider):
    """In-memory provider double.

    Returns ``result`` (or raises ``error``) and records every call.
    """

    name = "Fake"

    def __init__(self, result: ProviderImage | None = None, error: Exception | None = None):
        self.result = result if result is not None or error is not None else ProviderImage(
            url="https://cdn.example/x.png"
        )
        self.error = error
        self.calls: list[dict] = []

    def generate(self, prompt: str, *, width: int, height: int) -> ProviderImage | None:
        self.calls.append({"prompt": prompt, "width": width, "height": height})
        if self.error is not None:
            raise self.error
        return self.result


class StatusError(Exception):
    """Provider-style exception tagged with an HTTP status."""

    def __init__(self, status_code: int, message: str = "provider error"):
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every credential variable from the environment."""
    for name in ("NEBIUS_API_KEY", "PROMPTPIX_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def test_config(temp_dir: Path, clean_env) -> PromptPixConfig:
    """Create a test configuration with a fake key and temporary downloads dir.

    Returns:
        PromptPixConfig instance for testing
    """
    return PromptPixConfig(
        _env_file=None,
        NEBIUS_API_KEY="test-key",
        downloads_dir=str(temp_dir / "downloads"),
    )


@pytest.fixture
def unconfigured_config(temp_dir: Path, clean_env) -> PromptPixConfig:
    """Configuration without any provider credential."""
    return PromptPixConfig(
        _env_file=None,
        downloads_dir=str(temp_dir / "downloads"),
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def test_client(fake_provider: FakeProvider) -> Generator[TestClient, None, None]:
    """TestClient whose provider dependency returns ``fake_provider``.

    The lifespan hook is not run, so no real SDK client is created.
    """
    app.dependency_overrides[get_image_provider] = lambda: fake_provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client() -> Generator[TestClient, None, None]:
    """TestClient simulating a deployment without an API key."""
    app.dependency_overrides[get_image_provider] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def view_state() -> GeneratorViewState:
    """Create empty view state for testing."""
    return GeneratorViewState()


@pytest.fixture
def sample_image() -> GeneratedImage:
    return GeneratedImage(
        id="abc123",
        image_url="https://cdn.example/x.png",
        original_prompt="a red balloon",
        timestamp=datetime(2024, 5, 1, 12, 0, 0),
        size="1024x1024",
        quality="standard",
    )


@pytest.fixture
def state_with_image(sample_image: GeneratedImage) -> GeneratorViewState:
    return GeneratorViewState(images=(sample_image,))


@pytest.fixture
def make_provider():
    """Factory for :class:`FakeProvider` instances."""
    return FakeProvider


@pytest.fixture
def status_error():
    """Factory for provider exceptions carrying a ``status_code``."""
    return StatusError
