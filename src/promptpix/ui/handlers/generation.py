"""Generation and form-field handlers."""

import logging
import uuid
from collections.abc import Iterator
from datetime import datetime

import gradio as gr

from ..client import ProxyClient, ProxyRequestError
from ..models import GeneratorViewState
from ..state import (
    can_generate,
    generation_failed,
    generation_succeeded,
    request_generation,
    set_prompt,
    set_quality,
    set_size,
)
from ..validation import validate_prompt
from .common import emit_notification, get_proxy_client

logger = logging.getLogger(__name__)

GENERATE_LABEL = "✨ Generate Image"
GENERATING_LABEL = "⏳ Generating your image..."


def update_prompt(prompt: str, state: GeneratorViewState) -> tuple[GeneratorViewState, dict]:
    """Store the prompt text and enable Generate only for a non-blank prompt.

    Returns:
        Tuple of (updated_state, generate_button_update)
    """
    state = set_prompt(state, prompt)
    return state, gr.update(interactive=can_generate(state))


def update_size(size: str, state: GeneratorViewState) -> GeneratorViewState:
    return set_size(state, size)


def update_quality(quality: str, state: GeneratorViewState) -> GeneratorViewState:
    return set_quality(state, quality)


def generate_image(
    prompt: str,
    size: str,
    quality: str,
    state: GeneratorViewState,
    client: ProxyClient | None = None,
) -> Iterator[tuple[GeneratorViewState, dict, dict]]:
    """Run one generation and stream the state changes to the UI.

    The first yield switches the form to ``generating`` (button disabled);
    the second carries the outcome.  A blank prompt yields once with a
    "Prompt required" notification and never calls the proxy.

    Args:
        prompt: Prompt box contents
        size: Selected size
        quality: Selected quality
        state: Current view state
        client: Proxy client (defaults to the process-wide one)

    Yields:
        Tuples of (state, prompt_box_update, generate_button_update)
    """
    state = set_quality(set_size(set_prompt(state, prompt), size), quality)
    state = request_generation(state)

    if not state.is_generating:
        state = emit_notification(state)
        yield state, gr.update(), gr.update(interactive=can_generate(state), value=GENERATE_LABEL)
        return

    yield (
        state,
        gr.update(interactive=False),
        gr.update(interactive=False, value=GENERATING_LABEL),
    )

    client = client or get_proxy_client()
    try:
        payload = client.generate(validate_prompt(state.prompt), state.size, state.quality)
    except ProxyRequestError as e:
        logger.warning(f"Generation failed: {e.message}")
        state = generation_failed(state, e.message)
    else:
        state = generation_succeeded(state, payload, uuid.uuid4().hex, datetime.now())
        logger.info(f"Generated image {state.images[0].id} ({len(state.images)} in session)")

    state = emit_notification(state)
    yield (
        state,
        gr.update(value=state.prompt, interactive=True),
        gr.update(interactive=can_generate(state), value=GENERATE_LABEL),
    )
