"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


def find_and_load_env_file():
    """Find and load .env file in current directory or parent directories."""
    search_paths = [
        Path.cwd(),
        Path(__file__).parent.parent.parent.parent.parent,  # Project root
    ]

    for start_path in search_paths:
        current = start_path.resolve()
        # Check current directory and up to 3 levels up
        for _ in range(4):
            env_path = current / ".env"
            if env_path.exists():
                load_dotenv(env_path, override=False)
                return str(env_path)
            parent = current.parent
            if parent == current:  # Reached root
                break
            current = parent
    return None


# Load .env file before Settings class is defined
find_and_load_env_file()


class Settings(BaseSettings):
    """Application configuration settings.

    Every value can be overridden with an ``OIML_`` prefixed environment
    variable, e.g. ``OIML_LOG_LEVEL=DEBUG``.
    """

    # Provenance defaults used when the caller does not supply them
    default_project_id: str = "unknown"
    default_oiml_version: str = "0.1.0"
    model: Optional[str] = None

    # Transformation defaults
    auto_index: bool = True
    table_naming_convention: Literal["snake_case", "camelCase", "PascalCase"] = "snake_case"

    # Output
    output_dir: Path = Path("output")

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    log_quiet: bool = False  # console shows warnings and errors only

    model_config = SettingsConfigDict(
        env_prefix="OIML_",
        env_file=None,  # We load it manually with dotenv
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize settings and create the log directory if needed."""
        find_and_load_env_file()
        super().__init__(**kwargs)
        self.output_dir = Path(self.output_dir)
        if self.log_file:
            self.log_file = Path(self.log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
