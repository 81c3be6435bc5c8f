"""PromptPix - Text-to-image generation through a hosted provider."""

__version__ = "0.1.0"

from promptpix.core.config import PromptPixConfig, config

__all__ = [
    "PromptPixConfig",
    "config",
]
