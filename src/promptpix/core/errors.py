"""Error taxonomy for the generation proxy.

Every failure the proxy can report is a :class:`GenerationError` subclass.
Each carries the HTTP status it maps to and the user-facing message that is
returned verbatim in the ``{"error": ...}`` response body.

========================  ======  ===================================
Class                     Status  Meaning
========================  ======  ===================================
``InvalidRequest``        400     Client input defect
``ConfigurationError``    500     Deployment defect (missing API key)
``Unauthorized``          401     Provider rejected the credential
``RateLimited``           429     Provider throttled the request
``ProviderError``         500     Any other provider failure
========================  ======  ===================================
"""

from __future__ import annotations

PROMPT_REQUIRED_MESSAGE = "Prompt is required"
API_KEY_MISSING_MESSAGE = "Image provider API key not configured"
INVALID_API_KEY_MESSAGE = "Invalid API key"
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
NO_IMAGE_MESSAGE = "Failed to generate image"
PROVIDER_FAILURE_MESSAGE = "Failed to generate image. Please try again."


class GenerationError(Exception):
    """Base class for all errors surfaced by the generation proxy.

    Attributes:
        status_code: HTTP status returned to the client.
        message: Message returned to the client in the ``error`` field.
    """

    status_code: int = 500
    default_message: str = PROVIDER_FAILURE_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(GenerationError):
    """The request body is missing a prompt or is otherwise malformed."""

    status_code = 400
    default_message = PROMPT_REQUIRED_MESSAGE


class ConfigurationError(GenerationError):
    """The proxy is deployed without a provider credential."""

    status_code = 500
    default_message = API_KEY_MISSING_MESSAGE


class Unauthorized(GenerationError):
    status_code = 401
    default_message = INVALID_API_KEY_MESSAGE


class RateLimited(GenerationError):
    status_code = 429
    default_message = RATE_LIMITED_MESSAGE


class ProviderError(GenerationError):
    """The provider failed or returned a response without an image."""

    status_code = 500
    default_message = PROVIDER_FAILURE_MESSAGE


def map_provider_exception(exc: Exception) -> GenerationError:
    """Translate an exception raised by the provider SDK into the taxonomy.

    The decision is made purely on the ``status_code`` attribute that the
    openai SDK attaches to :class:`openai.APIStatusError` (and therefore to
    ``AuthenticationError`` and ``RateLimitError``).  Exceptions without a
    status, such as connection errors, become a generic :class:`ProviderError`.

    Args:
        exc: Exception raised while calling the provider.

    Returns:
        The matching :class:`GenerationError` instance (not raised).
    """
    if isinstance(exc, GenerationError):
        return exc

    status = getattr(exc, "status_code", None)
    if status == 401:
        return Unauthorized()
    if status == 429:
        return RateLimited()
    return ProviderError()
