"""API clients - database and cache handles with linear reconnect backoff"""
__version__ = "0.1.0"

from .backoff import (
    DEFAULT_POLICY,
    LinearBackoff,
    RedisLinearBackoff,
    backoff,
)

from .config import Settings

from .exceptions import (
    BackoffError,
    ConfigurationError,
)

from .supervisor import (
    ConnectionState,
    ReconnectSupervisor,
)

from .container import Clients

__all__ = [
    # Backoff
    "DEFAULT_POLICY",
    "LinearBackoff",
    "RedisLinearBackoff",
    "backoff",
    # Configuration
    "Settings",
    # Errors
    "BackoffError",
    "ConfigurationError",
    # Connections
    "ConnectionState",
    "ReconnectSupervisor",
    "Clients",
]
