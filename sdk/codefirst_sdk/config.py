"""
Configuration for the CodeFirst SDK.

Uses pydantic-settings for environment variable loading.
Credentials are opaque to the compiler and synchronizer.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class CodeFirstSettings(BaseSettings):
    """Synchronization configuration loaded from environment."""

    # Management API connection
    api_key: SecretStr = Field(default=SecretStr(""), description="Management API token")
    space_id: str = Field(default="", description="Space holding the content types")
    environment: str = Field(default="master", description="Environment within the space")
    base_url: str = Field(default="https://api.contentful.com", description="API base URL")
    timeout: float = Field(default=30.0, description="Request timeout seconds")

    # Synchronization behavior
    force_update: bool = Field(
        default=False, description="Update content types that already exist remotely"
    )
    publish_automatically: bool = Field(
        default=False, description="Activate each content type after upsert"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for the CLI")
    log_format: str = Field(default="text", description="Log format: text or json")

    model_config = {"env_prefix": "CODEFIRST_"}
