"""Client settings loaded from YAML or the environment."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from kuler.constants import BASE_URL, DEFAULT_ITEMS_PER_PAGE, DEFAULT_TIMEOUT, PUBLIC_URL
from kuler.errors import ConfigurationError

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class KulerSettings(BaseModel):
    """Settings for a FeedClient.

    Only the API key is required; the service locations and paging
    defaults rarely need overriding outside tests.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("kuler.yaml"),
        Path("~/.config/kuler/config.yaml").expanduser(),
        Path("/etc/kuler/config.yaml"),
    ]

    api_key: str = Field(..., min_length=1, description="Kuler API key")
    base_url: str = Field(BASE_URL, description="Feed service root, ending in '/'")
    public_url: str = Field(PUBLIC_URL, description="Public site root, ending in '/'")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    items_per_page: int = Field(
        DEFAULT_ITEMS_PER_PAGE, ge=1, le=100, description="Default page size for feed requests"
    )

    # ---- validators ----
    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api_key cannot be blank")
        return v

    @field_validator("base_url", "public_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"

    @classmethod
    def from_env(cls) -> KulerSettings:
        """Build settings from ``KULER_*`` environment variables.

        Raises:
            ConfigurationError: If KULER_API_KEY is unset or a value is invalid
        """
        data: dict[str, str] = {}
        for name in ("api_key", "base_url", "public_url", "timeout", "items_per_page"):
            value = os.environ.get(f"KULER_{name.upper()}")
            if value:
                data[name] = value
        if "api_key" not in data:
            raise ConfigurationError("Please provide an API key to use Kuler (set KULER_API_KEY)")
        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigurationError(f"Invalid configuration:\n{err}") from err

    @classmethod
    def load(cls, path: Path | None = None) -> KulerSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated KulerSettings object

        Raises:
            ConfigurationError: If no config file is found, or it cannot be
                parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("KULER_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise ConfigurationError(f"Config file from KULER_CONFIG not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise ConfigurationError(
                        "No configuration file found. Create kuler.yaml or set KULER_CONFIG."
                    )
        elif not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Unable to read config YAML: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigurationError(f"Invalid configuration:\n{err}") from err
