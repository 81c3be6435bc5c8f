"""UI event handlers organized by feature area.

- generation: prompt/size/quality fields and the Generate button
- gallery: per-image download and copy actions
"""

from .gallery import (
    copy_prompt,
    download_image,
    expire_copy_indicator,
    wait_for_copy_indicator,
)
from .generation import (
    generate_image,
    update_prompt,
    update_quality,
    update_size,
)

__all__ = [
    # Generation handlers
    "generate_image",
    "update_prompt",
    "update_quality",
    "update_size",
    # Gallery handlers
    "copy_prompt",
    "download_image",
    "expire_copy_indicator",
    "wait_for_copy_indicator",
]
