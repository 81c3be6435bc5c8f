"""Validation utilities for PromptPix UI inputs."""

import logging
import re

from .models import DOWNLOAD_EXTENSION, DOWNLOAD_PREFIX_LENGTH

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


class ValidationError(Exception):
    """User-friendly validation error.

    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt(prompt: str | None) -> str:
    """Validate the prompt box contents before anything is sent.

    Args:
        prompt: Raw text from the prompt box

    Returns:
        The prompt with surrounding whitespace removed

    Raises:
        ValidationError: If the prompt is empty or whitespace-only
    """
    if prompt is None or not prompt.strip():
        raise ValidationError("Please enter a description for your image.")
    return prompt.strip()


def download_filename(prompt: str) -> str:
    """Build the filename used when saving an image.

    The first 30 characters of the prompt are kept and every character
    outside ``[a-zA-Z0-9]`` is replaced with ``-``.

    Args:
        prompt: Original prompt of the image

    Returns:
        Filename such as ``ai-generated-a-red-balloon.png``
    """
    prefix = _NON_ALPHANUMERIC.sub("-", prompt[:DOWNLOAD_PREFIX_LENGTH])
    return f"ai-generated-{prefix}.{DOWNLOAD_EXTENSION}"
