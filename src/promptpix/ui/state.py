"""State transitions for the PromptPix UI.

Every function here is a pure reducer: it takes a
:class:`~promptpix.ui.models.GeneratorViewState` (plus event data) and returns
a new state without touching the network, the clock, or the renderer.  The
Gradio handlers supply ids and timestamps and perform the side effects.

Generation lifecycle::

    idle --request_generation--> generating --generation_succeeded--> idle
                                            --generation_failed-----> idle
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any

from promptpix.core.generation import IMAGE_QUALITIES, IMAGE_SIZES

from .models import COPY_INDICATOR_SECONDS, GeneratedImage, GeneratorViewState, Notification

logger = logging.getLogger(__name__)

GENERATION_FAILED_FALLBACK = "Failed to generate image"


def set_prompt(state: GeneratorViewState, prompt: str | None) -> GeneratorViewState:
    return replace(state, prompt=prompt or "")


def set_size(state: GeneratorViewState, size: str) -> GeneratorViewState:
    if size not in IMAGE_SIZES:
        logger.warning(f"Ignoring unsupported size: {size}")
        return state
    return replace(state, size=size)


def set_quality(state: GeneratorViewState, quality: str) -> GeneratorViewState:
    if quality not in IMAGE_QUALITIES:
        logger.warning(f"Ignoring unsupported quality: {quality}")
        return state
    return replace(state, quality=quality)


def can_generate(state: GeneratorViewState) -> bool:
    """Whether the Generate button should be enabled."""
    return not state.is_generating and bool(state.prompt.strip())


def request_generation(state: GeneratorViewState) -> GeneratorViewState:
    """Move to ``generating`` if the prompt is usable.

    A blank prompt leaves the status unchanged and queues a
    "Prompt required" notification.  A request while already generating is
    ignored.

    Args:
        state: Current view state

    Returns:
        New state; ``is_generating`` tells the caller whether to call the proxy
    """
    if state.is_generating:
        logger.debug("Generation already in progress, ignoring request")
        return state

    if not state.prompt.strip():
        return replace(
            state,
            notification=Notification(
                title="Prompt required",
                description="Please enter a description for your image.",
                variant="destructive",
            ),
        )

    return replace(state, status="generating", notification=None)


def generation_succeeded(
    state: GeneratorViewState,
    payload: dict[str, Any],
    image_id: str,
    timestamp: datetime,
) -> GeneratorViewState:
    """Prepend the new image, clear the prompt and return to ``idle``.

    Args:
        state: Current view state
        payload: Proxy response body (``imageUrl``, ``originalPrompt``,
            optional ``revisedPrompt``)
        image_id: Unique id for the new gallery entry
        timestamp: Creation time of the entry

    Returns:
        New state with exactly one more image
    """
    image = GeneratedImage(
        id=image_id,
        image_url=str(payload["imageUrl"]),
        original_prompt=payload.get("originalPrompt") or state.prompt.strip(),
        revised_prompt=payload.get("revisedPrompt"),
        timestamp=timestamp,
        size=state.size,
        quality=state.quality,
    )
    return replace(
        state,
        prompt="",
        status="idle",
        images=(image, *state.images),
        notification=Notification(
            title="Image generated successfully!",
            description="Your AI-generated image is ready.",
        ),
    )


def generation_failed(state: GeneratorViewState, message: str | None) -> GeneratorViewState:
    """Return to ``idle`` and surface *message*; the gallery is untouched."""
    return replace(
        state,
        status="idle",
        notification=Notification(
            title="Generation failed",
            description=message or GENERATION_FAILED_FALLBACK,
            variant="destructive",
        ),
    )


def mark_copied(state: GeneratorViewState, copy_key: str, now: float) -> GeneratorViewState:
    """Show the copied indicator for *copy_key* (``original-<id>`` / ``revised-<id>``)."""
    return replace(
        state,
        copied_key=copy_key,
        copied_at=now,
        notification=Notification(
            title="Copied to clipboard",
            description="Prompt has been copied to your clipboard.",
        ),
    )


def copy_failed(state: GeneratorViewState) -> GeneratorViewState:
    return replace(
        state,
        notification=Notification(
            title="Copy failed",
            description="Failed to copy prompt to clipboard.",
            variant="destructive",
        ),
    )


def is_copied(state: GeneratorViewState, copy_key: str, now: float) -> bool:
    """Whether the copied indicator for *copy_key* is still showing at *now*."""
    if state.copied_key != copy_key or state.copied_at is None:
        return False
    return now - state.copied_at < COPY_INDICATOR_SECONDS


def expire_copied(state: GeneratorViewState, now: float) -> GeneratorViewState:
    """Clear the copied indicator once it has been shown for two seconds.

    A newer copy started less than two seconds ago is left alone.
    """
    if state.copied_key is None or state.copied_at is None:
        return state
    if now - state.copied_at < COPY_INDICATOR_SECONDS:
        return state
    return replace(state, copied_key=None, copied_at=None)


def download_failed(state: GeneratorViewState) -> GeneratorViewState:
    return replace(
        state,
        notification=Notification(
            title="Download failed",
            description="Failed to download the image.",
            variant="destructive",
        ),
    )


def download_staged(state: GeneratorViewState, path: str) -> GeneratorViewState:
    """Record *path* as the session's staged download file."""
    return replace(state, download_path=path)


def clear_notification(state: GeneratorViewState) -> GeneratorViewState:
    if state.notification is None:
        return state
    return replace(state, notification=None)


def show_revised_prompt(image: GeneratedImage) -> bool:
    """The revised prompt is shown only when present and different."""
    return bool(image.revised_prompt) and image.revised_prompt != image.original_prompt
