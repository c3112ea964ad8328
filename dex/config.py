"""Runtime configuration for the exchange service."""

import os
from dataclasses import dataclass

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class ExchangeConfig:
    """Service settings, read from DEX_* environment variables.

    Attributes:
        host: Interface the API binds to (DEX_HOST, default: 0.0.0.0)
        port: API port (DEX_PORT, default: 8000)
        debug: Enable reload mode (DEX_DEBUG, default: false)
        log_level: structlog filtering level name (DEX_LOG_LEVEL, default: INFO)
        json_logs: Render logs as JSON instead of console text
            (DEX_JSON_LOGS, default: false)
        max_request_size: Largest accepted request body in bytes
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False
    max_request_size: int = 1024 * 1024

    @classmethod
    def from_env(cls) -> "ExchangeConfig":
        return cls(
            host=os.environ.get("DEX_HOST", cls.host),
            port=int(os.environ.get("DEX_PORT", str(cls.port))),
            debug=os.environ.get("DEX_DEBUG", "false").lower() in _TRUTHY,
            log_level=os.environ.get("DEX_LOG_LEVEL", cls.log_level).upper(),
            json_logs=os.environ.get("DEX_JSON_LOGS", "false").lower() in _TRUTHY,
        )


# Default configuration instance
DEFAULT_CONFIG = ExchangeConfig()
