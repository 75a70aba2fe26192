"""
Configuration management for track_mirror.
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .queries import DEFAULT_PROVIDERS, TIDAL_SEARCH_PREFIX

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_providers(value: Optional[str]) -> List[str]:
    if not value:
        return list(DEFAULT_PROVIDERS)
    return [provider.strip() for provider in value.split(",") if provider.strip()]


@dataclass
class Config:
    """Configuration settings for the application."""

    # Provider Configuration
    providers: List[str] = field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    fallback_prefix: str = TIDAL_SEARCH_PREFIX

    # Application Settings
    log_level: str = "INFO"

    # Search Configuration
    search_limit: int = 25

    # Development Settings
    debug_api_calls: bool = False

    # Internal settings
    _project_root: Optional[Path] = field(default=None, init=False)
    _tokens_dir: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Initialize derived settings."""
        self._project_root = self._find_project_root()
        self._tokens_dir = (
            self._project_root / ".tokens" if self._project_root else None
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            providers=_split_providers(os.getenv("MIRROR_PROVIDERS")),
            fallback_prefix=os.getenv("MIRROR_FALLBACK_PREFIX", TIDAL_SEARCH_PREFIX),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            search_limit=int(os.getenv("SEARCH_LIMIT", "25")),
            debug_api_calls=os.getenv("DEBUG_API_CALLS", "false").lower() == "true",
        )

    @classmethod
    def from_dotenv(cls, env_file: Optional[Path] = None) -> "Config":
        """Create configuration from .env file."""
        from dotenv import load_dotenv

        if env_file:
            load_dotenv(env_file)
        else:
            # Try to find .env in project root
            project_root = cls._find_project_root()
            if project_root:
                env_file = project_root / ".env"
                if env_file.exists():
                    load_dotenv(env_file)

        return cls.from_env()

    @staticmethod
    def _find_project_root() -> Optional[Path]:
        """Find the project root directory."""
        current = Path.cwd()

        # Look for markers that indicate project root
        markers = [".git", "pyproject.toml", ".env"]

        for parent in [current] + list(current.parents):
            if any((parent / marker).exists() for marker in markers):
                return parent

        return current

    def setup_logging(self) -> None:
        """Set up logging configuration."""
        log_level = getattr(logging, self.log_level.upper(), logging.INFO)

        # Create formatter
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        # Set up root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Remove existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        # Add console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        # Add debug logging for API calls if enabled
        if self.debug_api_calls:
            logging.getLogger("requests").setLevel(logging.DEBUG)
            logging.getLogger("urllib3").setLevel(logging.DEBUG)

    def validate(self) -> None:
        """Validate the configuration."""
        errors = []

        for provider in self.providers:
            if not provider.strip():
                errors.append("MIRROR_PROVIDERS must not contain blank templates")
            elif ":" not in provider:
                errors.append(f"Provider '{provider}' is missing a 'prefix:'")

        if not self.fallback_prefix.strip():
            errors.append("MIRROR_FALLBACK_PREFIX must not be empty")

        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        if self.search_limit <= 0:
            errors.append("SEARCH_LIMIT must be > 0")

        if errors:
            raise ConfigurationError(f"Configuration errors: {', '.join(errors)}")

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            raise ConfigurationError("Could not determine project root directory")
        return self._project_root

    @property
    def tokens_dir(self) -> Path:
        """Get the tokens directory."""
        if self._tokens_dir is None:
            raise ConfigurationError("Could not determine tokens directory")
        return self._tokens_dir

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (excluding private fields)."""
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith("_")
        }

    def __str__(self) -> str:
        return f"Config({self.to_dict()})"
