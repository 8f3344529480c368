"""kmuc-hoster runtime configuration and settings."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

PROGRESS_FILE_NAME = ".kmuc-progress.json"
LOG_FILE_NAME = "kmuc-hoster.log"


def _default_config_dir() -> Path:
    return Path.home() / ".kmuc"


@dataclass
class HosterConfig:
    """Runtime configuration for kmuc-hoster.

    Attributes:
        config_dir: Per-user directory holding the progress checkpoint and logs
        log_file: Explicit log file path (defaults to config_dir/kmuc-hoster.log)
    """

    config_dir: Path = field(default_factory=_default_config_dir)
    log_file: Optional[Path] = None

    @property
    def progress_file(self) -> Path:
        """Single global checkpoint slot for the init workflow."""
        return self.config_dir / PROGRESS_FILE_NAME

    @property
    def default_log_file(self) -> Path:
        return self.log_file or self.config_dir / LOG_FILE_NAME

    @classmethod
    def from_env(cls) -> "HosterConfig":
        """Create config from environment variables.

        Environment variables:
            KMUC_HOME: Directory for progress and logs (default: ~/.kmuc)
            KMUC_LOG_FILE: Log file path

        Returns:
            HosterConfig instance with values from environment or defaults
        """
        home = os.getenv("KMUC_HOME")
        log_file = os.getenv("KMUC_LOG_FILE")
        return cls(
            config_dir=Path(home).expanduser() if home else _default_config_dir(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )


# Global config instance (can be overridden)
_config: Optional[HosterConfig] = None


def get_config() -> HosterConfig:
    """Get the global kmuc-hoster configuration.

    Returns:
        HosterConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = HosterConfig.from_env()
    return _config


def set_config(config: HosterConfig) -> None:
    """Override the global configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next lookup re-reads the environment."""
    global _config
    _config = None
