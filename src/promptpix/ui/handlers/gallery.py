"""Gallery actions: download and copy-to-clipboard handlers."""

import logging
import shutil
import time
import uuid
from pathlib import Path

from promptpix.core.config import config

from ..client import ProxyClient, ProxyRequestError
from ..models import COPY_INDICATOR_SECONDS, GeneratorViewState
from ..state import copy_failed, download_failed, download_staged, expire_copied, mark_copied
from ..validation import download_filename
from .common import emit_notification, get_proxy_client

logger = logging.getLogger(__name__)


def download_image(
    image_id: str,
    state: GeneratorViewState,
    client: ProxyClient | None = None,
) -> tuple[str | None, GeneratorViewState]:
    """Fetch an image and stage it as a file the browser can save.

    The file is written to its own folder under ``config.downloads_dir`` so
    two images with the same prompt prefix never overwrite each other.  Gradio
    copies the returned file into its own cache, so the folder staged by the
    previous download of this session is removed once the new one exists.

    Args:
        image_id: Id of the gallery entry
        state: Current view state
        client: Proxy client (defaults to the process-wide one)

    Returns:
        Tuple of (file_path or None on failure, updated_state)
    """
    image = state.find_image(image_id)
    if image is None:
        logger.warning(f"Download requested for unknown image: {image_id}")
        return None, emit_notification(download_failed(state))

    client = client or get_proxy_client()
    try:
        content = client.fetch_image(image.image_url)
    except ProxyRequestError:
        return None, emit_notification(download_failed(state))

    target_dir = config.downloads_dir / uuid.uuid4().hex
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / download_filename(image.original_prompt)
    path.write_bytes(content)

    logger.info(f"Staged download {path} ({len(content)} bytes)")
    _remove_staged(state.download_path)
    return str(path), download_staged(state, str(path))


def _remove_staged(download_path: str | None) -> None:
    """Delete the folder of a previously staged download."""
    if not download_path:
        return
    folder = Path(download_path).parent
    root = config.downloads_dir.resolve()
    if folder.resolve().parent != root:
        logger.warning(f"Not removing {folder}: outside {root}")
        return
    shutil.rmtree(folder, ignore_errors=True)
    logger.debug(f"Removed staged download {folder}")


def copy_prompt(copy_key: str, clipboard_ok: bool, state: GeneratorViewState) -> GeneratorViewState:
    """Record a clipboard copy of an original or revised prompt.

    The clipboard write itself happens in the browser, which reports the
    outcome as *clipboard_ok*; this handler drives the "copied" indicator.

    Args:
        copy_key: ``original-<id>`` or ``revised-<id>``
        clipboard_ok: Whether the browser's clipboard write succeeded
        state: Current view state

    Returns:
        Updated state
    """
    if not clipboard_ok:
        logger.warning(f"Clipboard write failed for {copy_key}")
        return emit_notification(copy_failed(state))

    kind, _, image_id = copy_key.partition("-")
    image = state.find_image(image_id)
    if image is None or kind not in ("original", "revised"):
        return emit_notification(copy_failed(state))
    if kind == "revised" and not image.revised_prompt:
        return emit_notification(copy_failed(state))

    return emit_notification(mark_copied(state, copy_key, time.time()))


def wait_for_copy_indicator() -> None:
    """Block for the lifetime of the copied indicator."""
    time.sleep(COPY_INDICATOR_SECONDS)


def expire_copy_indicator(state: GeneratorViewState) -> GeneratorViewState:
    return expire_copied(state, time.time())
