# ============================================================================
# Lisk DEX HTTP API v1.0.0
# Read/write HTTP gateway in front of the DEX engine bus
# ============================================================================

__version__ = "1.0.0"

MODULE_NAME = "lisk_dex_http_api"
MODULE_AUTHOR = "Jonathan Gros-Dubois"

__all__ = ["__version__", "MODULE_NAME", "MODULE_AUTHOR"]
