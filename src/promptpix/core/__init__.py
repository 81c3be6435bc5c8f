"""Core functionality for the generation proxy.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - Settings prefixed with PROMPTPIX_ (the API key also accepts NEBIUS_API_KEY)

2. **Provider Layer** (provider.py):
   - ImageProvider interface and the OpenAI-compatible implementation
   - Explicitly constructed and injected; no global SDK client

3. **Service Layer** (generation.py, errors.py):
   - ImageGenerationService: validate, forward, normalise
   - GenerationError taxonomy with HTTP status codes

Usage Example
-------------
    from promptpix.core import ImageGenerationService, config, create_provider

    service = ImageGenerationService(create_provider(config))
    result = service.generate("a red balloon")
"""

from promptpix.core.config import PromptPixConfig, config
from promptpix.core.errors import (
    ConfigurationError,
    GenerationError,
    InvalidRequest,
    ProviderError,
    RateLimited,
    Unauthorized,
)
from promptpix.core.generation import GenerationResult, ImageGenerationService
from promptpix.core.provider import ImageProvider, OpenAIImageProvider, ProviderImage, create_provider

__all__ = [
    "ConfigurationError",
    "GenerationError",
    "GenerationResult",
    "ImageGenerationService",
    "ImageProvider",
    "InvalidRequest",
    "OpenAIImageProvider",
    "PromptPixConfig",
    "ProviderError",
    "ProviderImage",
    "RateLimited",
    "Unauthorized",
    "config",
    "create_provider",
]
