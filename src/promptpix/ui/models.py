"""Data models for the PromptPix UI view-model."""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal

from promptpix.core.generation import DEFAULT_QUALITY, DEFAULT_SIZE

logger = logging.getLogger(__name__)

GenerationStatus = Literal["idle", "generating"]
NotificationVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class GeneratedImage:
    """One generated image shown in the gallery.

    Created client-side from a successful proxy response and never persisted.
    """

    id: str
    image_url: str
    original_prompt: str
    timestamp: datetime
    size: str = DEFAULT_SIZE
    quality: str = DEFAULT_QUALITY
    revised_prompt: str | None = None

    @property
    def original_copy_key(self) -> str:
        return f"original-{self.id}"

    @property
    def revised_copy_key(self) -> str:
        return f"revised-{self.id}"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass(frozen=True)
class Notification:
    """A transient toast message."""

    title: str
    description: str = ""
    variant: NotificationVariant = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


@dataclass(frozen=True)
class GeneratorViewState:
    """Complete, serializable state of the generator form and gallery.

    Every change goes through a reducer in :mod:`promptpix.ui.state`, which
    returns a new instance instead of mutating this one.

    Attributes
    ----------
    prompt : str
        Current contents of the prompt box
    size : str
        Selected output size
    quality : str
        Selected quality
    status : GenerationStatus
        "idle" or "generating"
    images : tuple[GeneratedImage, ...]
        Generated images, newest first
    copied_key : str | None
        Copy key ("original-<id>" / "revised-<id>") showing the copied indicator
    copied_at : float | None
        Epoch seconds when copied_key was set
    notification : Notification | None
        Pending toast, shown once by the handlers
    download_path : str | None
        File staged by the last download in this session; replaced, not
        accumulated, by the next one
    """

    prompt: str = ""
    size: str = DEFAULT_SIZE
    quality: str = DEFAULT_QUALITY
    status: GenerationStatus = "idle"
    images: tuple[GeneratedImage, ...] = field(default_factory=tuple)
    copied_key: str | None = None
    copied_at: float | None = None
    notification: Notification | None = None
    download_path: str | None = None

    @property
    def is_generating(self) -> bool:
        return self.status == "generating"

    def find_image(self, image_id: str) -> GeneratedImage | None:
        return next((img for img in self.images if img.id == image_id), None)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, suitable for JSON serialisation."""
        return {
            "prompt": self.prompt,
            "size": self.size,
            "quality": self.quality,
            "status": self.status,
            "images": [img.to_dict() for img in self.images],
            "copied_key": self.copied_key,
            "copied_at": self.copied_at,
            "notification": asdict(self.notification) if self.notification else None,
            "download_path": self.download_path,
        }

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"GeneratorViewState(status={self.status}, images={len(self.images)})"


# Choices shown in the form, as (label, value) pairs
SIZE_CHOICES = [
    ("Square (1024×1024)", "1024x1024"),
    ("Landscape (1792×1024)", "1792x1024"),
    ("Portrait (1024×1792)", "1024x1792"),
]

QUALITY_CHOICES = [
    ("Standard", "standard"),
    ("HD (Higher quality)", "hd"),
]

COPY_INDICATOR_SECONDS = 2.0
DOWNLOAD_PREFIX_LENGTH = 30
DOWNLOAD_EXTENSION = "png"
