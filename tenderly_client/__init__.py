"""
Tenderly Client

Tenderly 交易模拟与 Virtual TestNets 的 Python 客户端。
"""

from .client import TenderlyClient
from .config import Settings, get_settings, reload_settings, setup_logging
from .errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    TenderlyError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "TenderlyClient",
    # Config
    "Settings",
    "get_settings",
    "reload_settings",
    "setup_logging",
    # Errors
    "ApiError",
    "ConfigurationError",
    "DecodeError",
    "TenderlyError",
    "TransportError",
]
