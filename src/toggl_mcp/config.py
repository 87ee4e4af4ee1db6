"""Configuration loaded from the environment (and an optional .env file)."""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

API_BASE_URL = "https://api.track.toggl.com/api/v9"
DEFAULT_TIMEOUT = 30.0
API_TOKEN_HELP_URL = "https://track.toggl.com/profile"


class TogglConfig(BaseModel):
    """Configuration schema for the Toggl API credential and client settings."""
    model_config = ConfigDict(str_strip_whitespace=True)

    api_token: str = Field(
        ...,
        description=f"Your Toggl Track API token. Get it from: {API_TOKEN_HELP_URL}",
        min_length=1
    )
    api_base_url: str = Field(default=API_BASE_URL)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_config() -> TogglConfig:
    """
    Build the configuration from environment variables.

    Reads TOGGL_API_KEY (required), TOGGL_API_BASE_URL, TOGGL_TIMEOUT and
    TOGGL_MCP_LOG_LEVEL. A .env file in the working directory is loaded first.

    Raises:
        ConfigurationError: If the API key is missing or a value is invalid
    """
    load_dotenv()

    values = {"api_token": os.getenv("TOGGL_API_KEY", "")}
    if os.getenv("TOGGL_API_BASE_URL"):
        values["api_base_url"] = os.environ["TOGGL_API_BASE_URL"]
    if os.getenv("TOGGL_TIMEOUT"):
        values["timeout"] = os.environ["TOGGL_TIMEOUT"]
    if os.getenv("TOGGL_MCP_LOG_LEVEL"):
        values["log_level"] = os.environ["TOGGL_MCP_LOG_LEVEL"].upper()

    try:
        return TogglConfig(**values)
    except PydanticValidationError as e:
        fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
        if "api_token" in fields:
            raise ConfigurationError(
                "TOGGL_API_KEY environment variable is required. "
                f"Get your API key from: {API_TOKEN_HELP_URL}"
            ) from e
        raise ConfigurationError(f"Invalid configuration for: {', '.join(fields)}") from e
