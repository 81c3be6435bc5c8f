"""Image generation provider client for PromptPix.

This module wraps the hosted text-to-image API behind a small interface so the
rest of the application never touches the vendor SDK directly.

Key Responsibilities
--------------------
- **Explicit construction** — :class:`OpenAIImageProvider` is built from a
  :class:`~promptpix.core.config.PromptPixConfig` (or handed a ready-made SDK
  client) at application startup and injected into request handlers.  No
  global SDK instance exists.
- **Fixed generation parameters** — model id, inference steps, negative
  prompt, seed, and response extension all come from configuration and are
  sent on every call.
- **Response normalisation** — the SDK response is reduced to a
  :class:`ProviderImage` holding the first image URL and the optional revised
  prompt.

Errors raised by the SDK are *not* caught here.  Mapping them onto the
proxy's error taxonomy is the job of
:class:`~promptpix.core.generation.ImageGenerationService`.

Usage
-----
::

    from promptpix.core.config import config
    from promptpix.core.provider import OpenAIImageProvider

    provider = OpenAIImageProvider(config)
    image = provider.generate("a red balloon", width=1024, height=1024)
    print(image.url)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from openai import OpenAI

from promptpix.core.config import PromptPixConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderImage:
    """First image returned by the provider.

    Attributes:
        url: Provider-hosted image URL, or ``None`` if the provider returned
            an entry without one.
        revised_prompt: Prompt after provider-side rewriting, if any.
    """

    url: str | None
    revised_prompt: str | None = None


class ImageProvider(ABC):
    """Abstract interface for a text-to-image provider."""

    name: str = "Base Image Provider"

    @abstractmethod
    def generate(self, prompt: str, *, width: int, height: int) -> ProviderImage | None:
        """Generate a single image from a prompt.

        Args:
            prompt: Text prompt, forwarded unchanged.
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            The first returned image, or ``None`` if the response held no
            image entries at all.
        """


class OpenAIImageProvider(ImageProvider):
    """Provider backed by an OpenAI-compatible ``images.generate`` endpoint.

    Nebius AI Studio is the default host; any service that speaks the OpenAI
    images API and accepts the extra diffusion parameters will work.

    Attributes:
        _config (PromptPixConfig):
            Application configuration - base URL, model id and fixed
            generation parameters.
        _client (OpenAI):
            The SDK client used for every request.
    """

    name = "OpenAI-compatible"

    def __init__(self, config: PromptPixConfig, client: Any | None = None) -> None:
        """Initialise the provider.

        Args:
            config: Application configuration instance.
            client: Optional pre-built SDK client.  When omitted an
                :class:`openai.OpenAI` client is created from
                ``config.provider_base_url`` and ``config.api_key``.

        Raises:
            ValueError: If no client is given and no API key is configured.
        """
        self._config = config

        if client is None:
            if not config.has_api_key:
                raise ValueError("Cannot create provider client without an API key")
            client = OpenAI(
                base_url=config.provider_base_url,
                api_key=config.api_key.get_secret_value(),
            )
            logger.info("Provider client created for %s", config.provider_base_url)

        self._client = client

    @property
    def model(self) -> str:
        return self._config.provider_model

    def build_request(self, prompt: str, *, width: int, height: int) -> dict[str, Any]:
        """Build the keyword arguments passed to ``images.generate``.

        Diffusion-specific parameters are not part of the OpenAI schema, so
        they travel in ``extra_body``.
        """
        return {
            "model": self._config.provider_model,
            "prompt": prompt,
            "response_format": "url",
            "extra_body": {
                "response_extension": self._config.response_extension,
                "width": width,
                "height": height,
                "num_inference_steps": self._config.num_inference_steps,
                "negative_prompt": self._config.negative_prompt,
                "seed": self._config.seed,
            },
        }

    def generate(self, prompt: str, *, width: int, height: int) -> ProviderImage | None:
        logger.info(
            "Requesting image from '%s' (%dx%d, steps=%d).",
            self._config.provider_model,
            width,
            height,
            self._config.num_inference_steps,
        )

        response = self._client.images.generate(
            **self.build_request(prompt, width=width, height=height)
        )

        data = getattr(response, "data", None) or []
        if not data:
            return None

        first = data[0]
        return ProviderImage(
            url=getattr(first, "url", None),
            revised_prompt=getattr(first, "revised_prompt", None),
        )


def create_provider(config: PromptPixConfig) -> ImageProvider | None:
    """Create the default provider, or ``None`` if no API key is configured.

    A missing key is reported per request as a configuration error rather
    than failing application startup.
    """
    if not config.has_api_key:
        logger.warning("No provider API key configured; generation requests will fail.")
        return None
    return OpenAIImageProvider(config)
