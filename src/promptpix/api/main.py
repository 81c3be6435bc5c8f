"""PromptPix Generation Proxy — FastAPI Application.

This module defines the FastAPI ``app`` instance, the proxy routes, the
error-to-JSON translation, and the ``main()`` CLI function that launches the
uvicorn server.

Architecture
------------
The proxy is stateless:

- **Configuration** comes from :data:`promptpix.core.config.config`.
- **The provider client** is built once in the lifespan hook and stored on
  ``app.state.provider``.  Route handlers receive it through the
  :func:`get_image_provider` dependency, which tests override with a double.
- **Errors** are :class:`~promptpix.core.errors.GenerationError` subclasses
  rendered as ``{"error": message}`` with the matching status code.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/generate-image``           Generate one image from a prompt
POST      ``/api/generate-image``       Same route, original client path
GET       ``/health``                   Liveness and credential presence
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    promptpix

Direct invocation::

    python -m promptpix.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from promptpix import __version__
from promptpix.api.models import ErrorResponse, GenerateImageRequest, GenerateImageResponse
from promptpix.core.config import config
from promptpix.core.errors import PROMPT_REQUIRED_MESSAGE, PROVIDER_FAILURE_MESSAGE, GenerationError
from promptpix.core.generation import ImageGenerationService
from promptpix.core.provider import ImageProvider, create_provider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — provider client setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the provider client on startup.

    ``app.state.provider`` is ``None`` when no API key is configured; every
    generation request then fails with a configuration error.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.provider = create_provider(config)
    logger.info(
        "Generation proxy started (model=%s, provider configured=%s).",
        config.provider_model,
        app.state.provider is not None,
    )

    yield

    app.state.provider = None
    logger.info("Generation proxy stopped.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="PromptPix Generation Proxy",
    description="Forwards text prompts to a hosted text-to-image provider.",
    version=__version__,
    lifespan=lifespan,
)

# The Gradio UI is served from a different port.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_image_provider(request: Request) -> ImageProvider | None:
    """Return the provider built at startup, or ``None`` if unconfigured."""
    return getattr(request.app.state, "provider", None)


def get_generation_service(
    provider: ImageProvider | None = Depends(get_image_provider),
) -> ImageGenerationService:
    return ImageGenerationService(provider)


# ---------------------------------------------------------------------------
# Error translation.
# ---------------------------------------------------------------------------


def _validation_message(exc: RequestValidationError) -> str:
    """Reduce pydantic validation errors to one user-facing message.

    Any problem with the prompt, or a body that is missing or not an object,
    becomes ``"Prompt is required"``.  Other field errors are reported as
    ``"<field>: <reason>"``.
    """
    errors = exc.errors()

    for err in errors:
        if err.get("type") == "json_invalid":
            return "Request body must be valid JSON"

    for err in errors:
        loc = tuple(err.get("loc", ()))
        if "prompt" in loc or loc == ("body",):
            return PROMPT_REQUIRED_MESSAGE

    if errors:
        err = errors[0]
        field = str(err.get("loc", ("body",))[-1])
        return f"{field}: {err.get('msg', 'invalid value')}"
    return PROMPT_REQUIRED_MESSAGE


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.info("Rejected generation request: %s", message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error during {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": PROVIDER_FAILURE_MESSAGE})


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(
    "/generate-image",
    response_model=GenerateImageResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@app.post(
    "/api/generate-image",
    response_model=GenerateImageResponse,
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def generate_image(
    req: GenerateImageRequest,
    service: ImageGenerationService = Depends(get_generation_service),
) -> GenerateImageResponse:
    """Generate one image from a prompt.

    The blocking SDK call runs in a worker thread.  The provider is called
    exactly once; there is no retry.

    Args:
        req: Validated :class:`GenerateImageRequest` payload.
        service: Generation service wrapping the injected provider.

    Returns:
        :class:`GenerateImageResponse` with the image URL and the original
        prompt.

    Raises:
        GenerationError: Rendered by :func:`generation_error_handler`.
    """
    logger.info("Generation requested (size=%s, quality=%s).", req.size, req.quality)

    result = await run_in_threadpool(service.generate, req.prompt, req.size)

    return GenerateImageResponse(
        image_url=result.image_url,
        revised_prompt=result.revised_prompt,
        original_prompt=result.original_prompt,
    )


@app.get("/health")
async def health(provider: ImageProvider | None = Depends(get_image_provider)) -> dict:
    """Report liveness and whether a provider credential is configured.

    Returns:
        Dictionary with ``status``, ``version``, ``model`` and
        ``provider_configured``.
    """
    return {
        "status": "ok",
        "version": __version__,
        "model": config.provider_model,
        "provider_configured": provider is not None,
    }


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~promptpix.core.config.config`
    (``PROMPTPIX_SERVER_HOST`` / ``PROMPTPIX_SERVER_PORT``).  Defaults to
    ``0.0.0.0:8000``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "promptpix.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
