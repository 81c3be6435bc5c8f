"""PromptPix — FastAPI generation proxy.

Modules
-------
main
    FastAPI application, route handlers, error translation and the
    ``main()`` CLI entry point.
models
    Pydantic models for request validation and response serialisation.
"""
