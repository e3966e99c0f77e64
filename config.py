"""Configuration settings for the contract converter."""

from dotenv import load_dotenv

load_dotenv()

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    """Global settings for the contract converter.

    Settings can be overridden via environment variables with CONTRACT_CONVERTER_ prefix.
    Example: CONTRACT_CONVERTER_STRICT_MATCHER_KEYS=false
    """

    # Resources
    resource_root: Optional[str] = Field(
        default=None,
        description="Root directory for bodyFromFile lookups; defaults to the contract file's directory"
    )

    # Matchers
    strict_matcher_keys: bool = Field(
        default=True,
        description="Fail when several matchers target the same field; otherwise the first one wins"
    )

    # Files
    contract_file_extensions: List[str] = Field(
        default_factory=lambda: [".yml", ".yaml"],
        description="File extensions accepted by the YAML converter"
    )

    # Output
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI"
    )
    yaml_width: int = Field(
        default=120,
        ge=20,
        description="Line width for emitted YAML documents"
    )

    model_config = {
        "env_prefix": "CONTRACT_CONVERTER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_resource_root(self) -> Optional[Path]:
        """Get resource root as Path object, if configured."""
        return Path(self.resource_root) if self.resource_root else None

    def accepts_extension(self, suffix: str) -> bool:
        """Check whether a file suffix belongs to a contract file."""
        return suffix.lower() in {ext.lower() for ext in self.contract_file_extensions}


# Create singleton instance
settings = Settings()
