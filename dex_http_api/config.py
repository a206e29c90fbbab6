"""
============================================================================
Lisk DEX HTTP API v1.0.0
Gateway Configuration
============================================================================

Reliability Level: L6 Critical
Input Constraints: Environment variables (optionally from .env)
Side Effects: Logs configuration on load

ENVIRONMENT VARIABLES:
    - DEX_HTTP_API_PORT: Listening port (default: 7011)
    - DEX_HTTP_API_HOST: Bind address (default: 0.0.0.0)
    - DEX_HTTP_API_ENABLE_CORS: Install CORS middleware (default: true)
    - DEX_HTTP_API_CORS_ORIGINS: Comma-separated origins (default: *)
    - DEX_HTTP_API_MODULE_ALIAS: Own module alias (default: lisk_dex_http_api)
    - DEX_MODULE_ALIAS: Exchange engine alias (default: lisk_dex)
    - DEX_BASE_CHAIN_ALIAS: Base settlement chain alias (optional)
    - DEX_QUOTE_CHAIN_ALIAS: Quote settlement chain alias (optional)
    - DEX_BUS_URL: Bus bridge URL (default: http://127.0.0.1:7010)
    - DEX_BUS_TIMEOUT_SECONDS: Bus transport timeout (default: 30)
    - DEX_HTTP_API_CONSOLE_LOG_LEVEL: Console log level (default: debug)
    - DEX_HTTP_API_FILE_LOG_LEVEL: File log level, "none" disables (default: debug)
    - DEX_HTTP_API_LOG_FILE: Log file path (default: logs/dex_http_api.log)

ERROR CODES:
    - CFG-001: Invalid configuration

============================================================================
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Error Codes
# =============================================================================

class GatewayConfigErrorCode:
    """Configuration error codes for audit logging."""
    CONFIG_INVALID = "CFG-001"


# =============================================================================
# Default Values
# =============================================================================

DEFAULT_PORT = 7011
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENABLE_CORS = True
DEFAULT_MODULE_ALIAS = "lisk_dex_http_api"
DEFAULT_DEX_MODULE_ALIAS = "lisk_dex"
DEFAULT_BUS_URL = "http://127.0.0.1:7010"
DEFAULT_BUS_TIMEOUT_SECONDS = 30.0
DEFAULT_CONSOLE_LOG_LEVEL = "debug"
DEFAULT_FILE_LOG_LEVEL = "debug"
DEFAULT_LOG_FILE = "logs/dex_http_api.log"

# Accepted log level names ("none" switches the sink off)
LOG_LEVELS = ("none", "critical", "error", "warn", "warning", "info", "debug", "trace")


# =============================================================================
# Configuration Exception
# =============================================================================

class GatewayConfigurationError(Exception):
    """Raised when the gateway configuration cannot be used."""

    def __init__(self, message: str, error_code: str = GatewayConfigErrorCode.CONFIG_INVALID):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")


# =============================================================================
# Helpers
# =============================================================================

def _read_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def _read_optional(name: str) -> Optional[str]:
    raw = os.environ.get(name, "").strip()
    return raw or None


def _read_log_level(name: str, default: str) -> str:
    raw = os.environ.get(name, default).strip().lower()
    if raw not in LOG_LEVELS:
        logger.warning(
            f"[GW-CONFIG] Invalid {name} value: {raw}, using default: {default}"
        )
        return default
    return raw


# =============================================================================
# GatewayConfig Class
# =============================================================================

@dataclass
class GatewayConfig:
    """
    HTTP gateway configuration.

    Reliability Level: L6 Critical
    Input Constraints: dex_module_alias must be non-empty
    Side Effects: None

    The chain aliases are capability flags: when one is None, the routes
    that need that chain answer 501 instead of invoking the bus.
    """

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    enable_cors: bool = DEFAULT_ENABLE_CORS
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    module_alias: str = DEFAULT_MODULE_ALIAS
    dex_module_alias: str = DEFAULT_DEX_MODULE_ALIAS
    base_chain_module_alias: Optional[str] = None
    quote_chain_module_alias: Optional[str] = None
    bus_url: str = DEFAULT_BUS_URL
    bus_timeout_seconds: float = DEFAULT_BUS_TIMEOUT_SECONDS
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    file_log_level: str = DEFAULT_FILE_LOG_LEVEL
    log_file: str = DEFAULT_LOG_FILE

    def validate(self) -> None:
        """
        Validate configuration completeness.

        Raises:
            GatewayConfigurationError: CFG-001 if any value is unusable
        """
        errors: List[str] = []

        if not 0 < self.port < 65536:
            errors.append(f"DEX_HTTP_API_PORT must be between 1 and 65535, got: {self.port}")

        if not self.dex_module_alias:
            errors.append("DEX_MODULE_ALIAS must not be empty")

        if not self.module_alias:
            errors.append("DEX_HTTP_API_MODULE_ALIAS must not be empty")

        for name, alias in (
            ("DEX_BASE_CHAIN_ALIAS", self.base_chain_module_alias),
            ("DEX_QUOTE_CHAIN_ALIAS", self.quote_chain_module_alias),
        ):
            if alias is not None and alias == self.dex_module_alias:
                errors.append(f"{name} must differ from DEX_MODULE_ALIAS ({alias})")

        if self.bus_timeout_seconds <= 0:
            errors.append(
                f"DEX_BUS_TIMEOUT_SECONDS must be positive, got: {self.bus_timeout_seconds}"
            )

        if errors:
            error_msg = "Gateway configuration validation failed: " + "; ".join(errors)
            logger.error(f"[{GatewayConfigErrorCode.CONFIG_INVALID}] {error_msg}")
            raise GatewayConfigurationError(error_msg)

        logger.info(
            f"[GW-CONFIG] Configuration validated | "
            f"port={self.port} | "
            f"dex_module_alias={self.dex_module_alias} | "
            f"base_chain={self.base_chain_module_alias} | "
            f"quote_chain={self.quote_chain_module_alias}"
        )

    @classmethod
    def from_environment(cls, validate: bool = True) -> "GatewayConfig":
        """
        Load configuration from environment variables.

        Malformed numeric values fall back to their defaults with a warning;
        structural problems are left to validate().
        """
        port_str = os.environ.get("DEX_HTTP_API_PORT", str(DEFAULT_PORT))
        try:
            port = int(port_str.strip())
        except ValueError:
            logger.warning(
                f"[GW-CONFIG] Invalid DEX_HTTP_API_PORT value: {port_str}, "
                f"using default: {DEFAULT_PORT}"
            )
            port = DEFAULT_PORT

        timeout_str = os.environ.get("DEX_BUS_TIMEOUT_SECONDS", str(DEFAULT_BUS_TIMEOUT_SECONDS))
        try:
            bus_timeout_seconds = float(timeout_str.strip())
        except ValueError:
            logger.warning(
                f"[GW-CONFIG] Invalid DEX_BUS_TIMEOUT_SECONDS value: {timeout_str}, "
                f"using default: {DEFAULT_BUS_TIMEOUT_SECONDS}"
            )
            bus_timeout_seconds = DEFAULT_BUS_TIMEOUT_SECONDS

        origins_str = os.environ.get("DEX_HTTP_API_CORS_ORIGINS", "*")
        cors_origins = [o.strip() for o in origins_str.split(",") if o.strip()] or ["*"]

        config = cls(
            port=port,
            host=os.environ.get("DEX_HTTP_API_HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
            enable_cors=_read_bool("DEX_HTTP_API_ENABLE_CORS", DEFAULT_ENABLE_CORS),
            cors_origins=cors_origins,
            module_alias=_read_optional("DEX_HTTP_API_MODULE_ALIAS") or DEFAULT_MODULE_ALIAS,
            dex_module_alias=_read_optional("DEX_MODULE_ALIAS") or DEFAULT_DEX_MODULE_ALIAS,
            base_chain_module_alias=_read_optional("DEX_BASE_CHAIN_ALIAS"),
            quote_chain_module_alias=_read_optional("DEX_QUOTE_CHAIN_ALIAS"),
            bus_url=_read_optional("DEX_BUS_URL") or DEFAULT_BUS_URL,
            bus_timeout_seconds=bus_timeout_seconds,
            console_log_level=_read_log_level(
                "DEX_HTTP_API_CONSOLE_LOG_LEVEL", DEFAULT_CONSOLE_LOG_LEVEL
            ),
            file_log_level=_read_log_level(
                "DEX_HTTP_API_FILE_LOG_LEVEL", DEFAULT_FILE_LOG_LEVEL
            ),
            log_file=_read_optional("DEX_HTTP_API_LOG_FILE") or DEFAULT_LOG_FILE,
        )

        logger.info(
            f"[GW-CONFIG] Loading configuration from environment | "
            f"port={config.port} | "
            f"enable_cors={config.enable_cors} | "
            f"dex_module_alias={config.dex_module_alias}"
        )

        if validate:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for logging."""
        return {
            "port": self.port,
            "host": self.host,
            "enable_cors": self.enable_cors,
            "cors_origins": list(self.cors_origins),
            "module_alias": self.module_alias,
            "dex_module_alias": self.dex_module_alias,
            "base_chain_module_alias": self.base_chain_module_alias,
            "quote_chain_module_alias": self.quote_chain_module_alias,
            "bus_url": self.bus_url,
            "bus_timeout_seconds": self.bus_timeout_seconds,
            "console_log_level": self.console_log_level,
            "file_log_level": self.file_log_level,
            "log_file": self.log_file,
        }


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

_config_instance: Optional[GatewayConfig] = None


def get_gateway_config(validate: bool = True) -> GatewayConfig:
    """Return the process-wide configuration, loading it on first access."""
    global _config_instance

    if _config_instance is None:
        _config_instance = GatewayConfig.from_environment(validate=validate)

    return _config_instance


def reset_gateway_config() -> None:
    """Forget the cached configuration (tests only)."""
    global _config_instance
    _config_instance = None
    logger.debug("[GW-CONFIG] Configuration instance reset")


__all__ = [
    "GatewayConfig",
    "GatewayConfigurationError",
    "GatewayConfigErrorCode",
    "DEFAULT_PORT",
    "DEFAULT_HOST",
    "DEFAULT_ENABLE_CORS",
    "DEFAULT_MODULE_ALIAS",
    "DEFAULT_DEX_MODULE_ALIAS",
    "DEFAULT_BUS_URL",
    "DEFAULT_BUS_TIMEOUT_SECONDS",
    "DEFAULT_LOG_FILE",
    "LOG_LEVELS",
    "get_gateway_config",
    "reset_gateway_config",
]
