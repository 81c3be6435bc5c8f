"""Tests for promptpix.core.generation — ImageGenerationService.

Tests use FakeProvider from conftest.py so no SDK or network is involved.
"""

from __future__ import annotations

import pytest

from promptpix.core.errors import (
    ConfigurationError,
    InvalidRequest,
    ProviderError,
    RateLimited,
    Unauthorized,
)
from promptpix.core.generation import IMAGE_SIZES, GenerationResult, ImageGenerationService
from promptpix.core.provider import ProviderImage


class TestSuccess:
    def test_returns_url_and_echoes_prompt(self, fake_provider):
        service = ImageGenerationService(fake_provider)
        result = service.generate("a red balloon")

        assert result == GenerationResult(
            image_url="https://cdn.example/x.png",
            original_prompt="a red balloon",
            revised_prompt=None,
        )

    def test_prompt_forwarded_unchanged(self, fake_provider):
        """Surrounding whitespace is not stripped before forwarding."""
        service = ImageGenerationService(fake_provider)
        result = service.generate("  a red balloon ")

        assert fake_provider.calls[0]["prompt"] == "  a red balloon "
        assert result.original_prompt == "  a red balloon "

    def test_revised_prompt_passed_through(self, make_provider):
        provider = make_provider(
            ProviderImage(url="https://cdn.example/y.png", revised_prompt="a shiny red balloon")
        )
        result = ImageGenerationService(provider).generate("a red balloon")
        assert result.revised_prompt == "a shiny red balloon"

    def test_default_size_is_square(self, fake_provider):
        ImageGenerationService(fake_provider).generate("x")
        assert fake_provider.calls[0]["width"] == 1024
        assert fake_provider.calls[0]["height"] == 1024

    @pytest.mark.parametrize("size", sorted(IMAGE_SIZES))
    def test_size_resolved_to_dimensions(self, fake_provider, size):
        ImageGenerationService(fake_provider).generate("x", size=size)
        call = fake_provider.calls[0]
        assert (call["width"], call["height"]) == IMAGE_SIZES[size]

    def test_provider_called_once(self, fake_provider):
        ImageGenerationService(fake_provider).generate("x")
        assert len(fake_provider.calls) == 1


class TestValidation:
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt_rejected(self, fake_provider, prompt):
        with pytest.raises(InvalidRequest) as exc_info:
            ImageGenerationService(fake_provider).generate(prompt)
        assert exc_info.value.message == "Prompt is required"
        assert fake_provider.calls == []

    def test_unsupported_size_rejected(self, fake_provider):
        with pytest.raises(InvalidRequest):
            ImageGenerationService(fake_provider).generate("x", size="640x480")
        assert fake_provider.calls == []


class TestConfiguration:
    def test_missing_provider_raises_configuration_error(self):
        service = ImageGenerationService(None)
        assert service.is_configured is False
        with pytest.raises(ConfigurationError) as exc_info:
            service.generate("a red balloon")
        assert exc_info.value.status_code == 500


class TestProviderFailures:
    def test_no_url_raises_provider_error(self, make_provider):
        provider = make_provider(ProviderImage(url=None))
        with pytest.raises(ProviderError) as exc_info:
            ImageGenerationService(provider).generate("x")
        assert exc_info.value.message == "Failed to generate image"

    def test_empty_response_raises_provider_error(self, make_provider):
        provider = make_provider()
        provider.result = None
        with pytest.raises(ProviderError):
            ImageGenerationService(provider).generate("x")

    def test_401_maps_to_unauthorized(self, make_provider, status_error):
        provider = make_provider(error=status_error(401))
        with pytest.raises(Unauthorized):
            ImageGenerationService(provider).generate("x")

    def test_429_maps_to_rate_limited(self, make_provider, status_error):
        provider = make_provider(error=status_error(429))
        with pytest.raises(RateLimited):
            ImageGenerationService(provider).generate("x")

    def test_other_errors_map_to_provider_error(self, make_provider):
        provider = make_provider(error=ConnectionError("boom"))
        with pytest.raises(ProviderError) as exc_info:
            ImageGenerationService(provider).generate("x")
        assert exc_info.value.message == "Failed to generate image. Please try again."
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_no_retry_after_failure(self, make_provider, status_error):
        provider = make_provider(error=status_error(503))
        with pytest.raises(ProviderError):
            ImageGenerationService(provider).generate("x")
        assert len(provider.calls) == 1
