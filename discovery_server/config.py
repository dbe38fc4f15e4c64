"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Loads a .env file from the project root when one exists.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from discovery.models.config import DEFAULT_CONFIG, DiscoveryConfig

BASE_DIR = Path(__file__).resolve().parent.parent

root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Paths
    catalog_dir: Path = BASE_DIR / "data" / "catalog"
    # None keeps sessions in memory
    sessions_dir: Optional[Path] = None
    discovery_config_path: Optional[Path] = None

    # Text analysis
    analysis_provider: str = "anthropic"
    analysis_api_key: Optional[str] = None
    analysis_timeout_seconds: Optional[float] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        provider = os.getenv("ANALYSIS_PROVIDER", "anthropic").strip().lower() or "anthropic"
        timeout = os.getenv("ANALYSIS_TIMEOUT_SECONDS")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_dir=_path_env("CATALOG_DIR", BASE_DIR / "data" / "catalog"),
            sessions_dir=_path_env("SESSIONS_DIR"),
            discovery_config_path=_path_env("DISCOVERY_CONFIG_PATH"),
            analysis_provider=provider,
            analysis_api_key=os.getenv("ANALYSIS_API_KEY") or None,
            analysis_timeout_seconds=float(timeout) if timeout else None,
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.catalog_dir.exists():
            errors.append(f"Catalog directory not found: {self.catalog_dir}")
        if self.discovery_config_path and not self.discovery_config_path.exists():
            errors.append(f"Discovery config not found: {self.discovery_config_path}")
        if self.sessions_dir and self.sessions_dir.exists() and not self.sessions_dir.is_dir():
            errors.append(f"Sessions path is not a directory: {self.sessions_dir}")

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create the sessions directory when file-backed sessions are configured."""
        if self.sessions_dir:
            self.sessions_dir.mkdir(parents=True, exist_ok=True)

    def load_discovery_config(self) -> DiscoveryConfig:
        """DiscoveryConfig from discovery_config_path, or defaults."""
        config = DEFAULT_CONFIG
        if self.discovery_config_path:
            with open(self.discovery_config_path) as f:
                config = DiscoveryConfig.from_dict(json.load(f))
        if self.analysis_timeout_seconds is not None:
            config = config.model_copy(
                update={"analysis_timeout_seconds": self.analysis_timeout_seconds}
            )
        return config


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
