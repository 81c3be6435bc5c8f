"""Helpers shared by the UI handlers."""

import logging

import gradio as gr

from promptpix.core.config import config

from ..client import ProxyClient
from ..models import GeneratorViewState
from ..state import clear_notification

logger = logging.getLogger(__name__)

_proxy_client: ProxyClient | None = None


def get_proxy_client() -> ProxyClient:
    """Return the process-wide proxy client, creating it on first use."""
    global _proxy_client
    if _proxy_client is None:
        logger.info(f"Creating proxy client for {config.proxy_url}")
        _proxy_client = ProxyClient(config.proxy_url)
    return _proxy_client


def emit_notification(state: GeneratorViewState) -> GeneratorViewState:
    """Show the pending notification as a Gradio toast and clear it.

    Args:
        state: View state that may carry a notification

    Returns:
        The same state without the notification
    """
    notification = state.notification
    if notification is None:
        return state

    text = f"{notification.title}: {notification.description}" if notification.description else notification.title
    if notification.is_error:
        gr.Warning(text)
    else:
        gr.Info(text)

    return clear_notification(state)
