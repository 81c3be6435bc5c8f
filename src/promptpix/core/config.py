"""Configuration management for PromptPix.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PROMPTPIX_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PROMPTPIX_* prefix)
2. .env file in the project root
3. Default values defined in PromptPixConfig

The provider credential is the one exception to the prefix rule: it is read
from either ``PROMPTPIX_API_KEY`` or ``NEBIUS_API_KEY``.

Example .env file:
    NEBIUS_API_KEY=sk-...
    PROMPTPIX_PROVIDER_MODEL=black-forest-labs/flux-dev
    PROMPTPIX_SERVER_PORT=8000
    PROMPTPIX_PROXY_URL=http://127.0.0.1:8000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from promptpix.core.config import config

    print(config.provider_model)
    print(config.has_api_key)

Missing Credential
------------------
A missing API key is NOT a startup error.  The proxy starts normally and
answers every generation request with a 500 configuration error until the
key is provided and the server restarted.

See Also
--------
- .env.example: Template with all available configuration options
- PromptPixConfig: Full configuration class documentation
"""

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class PromptPixConfig(BaseSettings):
    """Main configuration for PromptPix.

    Attributes
    ----------
    Provider Settings:
        api_key : SecretStr | None
            Credential for the image generation provider
        provider_base_url : str
            Base URL of the OpenAI-compatible provider API
        provider_model : str
            Model identifier sent with every generation request

    Generation Settings:
        num_inference_steps : int
            Fixed number of inference steps
        negative_prompt : str
            Fixed negative prompt (empty by default)
        seed : int
            Fixed seed (-1 lets the provider pick a random one)
        response_extension : str
            Image file extension requested from the provider

    Server Settings:
        server_host : str
            Bind address for the proxy API (uvicorn)
        server_port : int
            Port for the proxy API

    UI Settings:
        gradio_server_name : str
            Bind address for the Gradio UI
        gradio_server_port : int
            Port for the Gradio UI
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)
        proxy_url : str
            Base URL the UI uses to reach the proxy
        downloads_dir : Path
            Directory where downloaded images are staged for the browser

    Examples
    --------
        >>> custom_config = PromptPixConfig(NEBIUS_API_KEY="test-key", server_port=9000)
        >>> custom_config.has_api_key
        True
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMPTPIX_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Provider settings
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("PROMPTPIX_API_KEY", "NEBIUS_API_KEY"),
        description="API key for the image generation provider",
    )
    provider_base_url: str = Field(
        default="https://api.studio.nebius.com/v1/",
        description="Base URL of the OpenAI-compatible image generation API",
    )
    provider_model: str = Field(
        default="black-forest-labs/flux-dev",
        description="Model identifier used for every generation",
    )

    # Fixed generation parameters
    num_inference_steps: int = Field(
        default=28,
        description="Number of inference steps sent to the provider",
        ge=1,
        le=100,
    )
    negative_prompt: str = Field(
        default="",
        description="Negative prompt sent to the provider",
    )
    seed: int = Field(
        default=-1,
        description="Generation seed (-1 = random)",
    )
    response_extension: str = Field(
        default="png",
        description="Image format requested from the provider",
    )

    # API server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Proxy server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Proxy server port",
        ge=1024,
        le=65535,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )
    proxy_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the generation proxy, as seen from the UI",
    )
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory for images fetched by the download action",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty provider credential is configured."""
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


# Global configuration instance
# Loads values from environment variables (PROMPTPIX_* prefix) and .env file.
config = PromptPixConfig()
