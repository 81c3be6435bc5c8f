"""Generation service: one prompt in, one image URL out.

:class:`ImageGenerationService` is the business logic behind
``POST /generate-image``.  It has no HTTP concerns and is exercised directly
in tests with a fake provider.

Flow
----
1. Reject a blank prompt -> ``InvalidRequest``.
2. Refuse to run without a provider (missing API key) -> ``ConfigurationError``.
3. Resolve the requested size to pixel dimensions.
4. Call the provider exactly once.
5. Map any provider exception -> ``Unauthorized`` / ``RateLimited`` /
   ``ProviderError``.
6. Refuse responses without an image URL -> ``ProviderError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from promptpix.core.errors import (
    NO_IMAGE_MESSAGE,
    ConfigurationError,
    GenerationError,
    InvalidRequest,
    ProviderError,
    map_provider_exception,
)
from promptpix.core.provider import ImageProvider

logger = logging.getLogger(__name__)

# Supported output sizes, keyed by the value the client sends.
IMAGE_SIZES: dict[str, tuple[int, int]] = {
    "1024x1024": (1024, 1024),
    "1792x1024": (1792, 1024),
    "1024x1792": (1024, 1792),
}
DEFAULT_SIZE = "1024x1024"

IMAGE_QUALITIES = ("standard", "hd")
DEFAULT_QUALITY = "standard"


@dataclass(frozen=True)
class GenerationResult:
    """Normalised outcome of a successful generation."""

    image_url: str
    original_prompt: str
    revised_prompt: str | None = None


class ImageGenerationService:
    """Validates, forwards and normalises a single generation request.

    Attributes:
        _provider (ImageProvider | None):
            Provider used for every call, or ``None`` when the deployment has
            no API key.
    """

    def __init__(self, provider: ImageProvider | None) -> None:
        self._provider = provider

    @property
    def is_configured(self) -> bool:
        return self._provider is not None

    def generate(self, prompt: str, size: str = DEFAULT_SIZE) -> GenerationResult:
        """Generate one image for *prompt*.

        Args:
            prompt: Non-empty prompt; echoed back unchanged in the result.
            size: One of :data:`IMAGE_SIZES`.

        Returns:
            :class:`GenerationResult` with the first image URL.

        Raises:
            InvalidRequest: If *prompt* is blank or *size* is unsupported.
            ConfigurationError: If no provider is configured.
            Unauthorized: If the provider rejected the API key.
            RateLimited: If the provider throttled the request.
            ProviderError: For every other provider failure, including a
                response without an image URL.
        """
        if not prompt or not prompt.strip():
            raise InvalidRequest()

        if self._provider is None:
            logger.error("Generation requested but no provider API key is configured")
            raise ConfigurationError()

        if size not in IMAGE_SIZES:
            raise InvalidRequest(f"Unsupported size: {size}")
        width, height = IMAGE_SIZES[size]

        try:
            image = self._provider.generate(prompt, width=width, height=height)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Provider call failed: {e}", exc_info=True)
            raise map_provider_exception(e) from e

        if image is None or not image.url:
            logger.error("Provider response did not contain an image URL")
            raise ProviderError(NO_IMAGE_MESSAGE)

        logger.info("Image generated")
        logger.debug(f"Image URL: {image.url}")

        return GenerationResult(
            image_url=image.url,
            original_prompt=prompt,
            revised_prompt=image.revised_prompt,
        )
