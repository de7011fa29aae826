"""
Runtime configuration.

Environment variables:
- CR_SNAPSHOT_PATH: Snapshot file (default: codes.json)
- CR_HOST: Listen address (default: 0.0.0.0)
- CR_PORT: Listen port (default: 13579)
- CR_SSL_CERT: TLS certificate file (default: ssl.crt)
- CR_SSL_KEY: TLS private key file (default: ssl.key)
- CR_LOG_LEVEL: Logging level name (default: INFO)
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel

from code_registry.core.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class RegistryConfig(BaseModel):
    """Configuration for the registry service."""

    snapshot_path: Path = Path("codes.json")
    host: str = "0.0.0.0"
    port: int = 13579
    ssl_certfile: Path = Path("ssl.crt")
    ssl_keyfile: Path = Path("ssl.key")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """
        Load configuration from environment.

        Raises:
            ConfigurationError: If CR_PORT or CR_LOG_LEVEL holds an unusable value
        """
        defaults = cls()

        port_str = os.getenv("CR_PORT")
        if port_str is None:
            port = defaults.port
        else:
            try:
                port = int(port_str)
            except ValueError:
                raise ConfigurationError(
                    "CR_PORT must be an integer", env_var="CR_PORT", value=port_str
                ) from None
            if not 0 < port < 65536:
                raise ConfigurationError(
                    "CR_PORT must be between 1 and 65535", env_var="CR_PORT", value=port_str
                )

        log_level = os.getenv("CR_LOG_LEVEL", defaults.log_level).upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {log_level}", env_var="CR_LOG_LEVEL", value=log_level
            )

        return cls(
            snapshot_path=Path(os.getenv("CR_SNAPSHOT_PATH", str(defaults.snapshot_path))),
            host=os.getenv("CR_HOST", defaults.host),
            port=port,
            ssl_certfile=Path(os.getenv("CR_SSL_CERT", str(defaults.ssl_certfile))),
            ssl_keyfile=Path(os.getenv("CR_SSL_KEY", str(defaults.ssl_keyfile))),
            log_level=log_level,
        )


def configure_logging(level: str) -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
