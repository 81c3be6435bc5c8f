"""Pydantic request and response models for the generation proxy.

FastAPI uses these models for request validation, serialisation and OpenAPI
documentation.  Validation happens before any business logic runs, so the
route handler only ever sees a typed, non-blank prompt.

Models
------
GenerateImageRequest
    Payload for ``POST /generate-image``.
GenerateImageResponse
    Successful response body (camelCase keys on the wire).
ErrorResponse
    Body of every non-2xx response.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from promptpix.core.errors import PROMPT_REQUIRED_MESSAGE

ImageSize = Literal["1024x1024", "1792x1024", "1024x1792"]
ImageQuality = Literal["standard", "hd"]


class GenerateImageRequest(BaseModel):
    """Request body for the ``POST /generate-image`` endpoint.

    Attributes:
        prompt: Text description of the image.  Must contain at least one
            non-whitespace character.  Forwarded to the provider unchanged.
        size: Output dimensions.  Defaults to ``"1024x1024"``.
        quality: ``"standard"`` or ``"hd"``.  Accepted for client
            compatibility; the provider has no quality setting.
    """

    prompt: str = Field(
        ...,
        description="Text prompt describing the image to generate.",
    )
    size: ImageSize = Field(
        default="1024x1024",
        description="Output size: '1024x1024', '1792x1024' or '1024x1792'.",
    )
    quality: ImageQuality = Field(
        default="standard",
        description="Quality hint: 'standard' or 'hd' (not forwarded).",
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("prompt_required", PROMPT_REQUIRED_MESSAGE)
        return value


class GenerateImageResponse(BaseModel):
    """Response body for a successful generation.

    Attributes:
        image_url: Provider-hosted URL of the generated image.
        revised_prompt: Provider-rewritten prompt, omitted when absent.
        original_prompt: The submitted prompt, unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")
    revised_prompt: str | None = Field(default=None, alias="revisedPrompt")
    original_prompt: str = Field(..., alias="originalPrompt")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
