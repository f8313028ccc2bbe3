# Config
class ConfigError(ValueError):
    """Raised when the route config file is missing, unreadable or malformed."""

# Docker
class DiscoveryError(ConnectionError):
    """Raised when running containers cannot be listed from the Docker daemon."""

# mc-router
class RouterFetchError(ConnectionError):
    """Raised when the current routes cannot be retrieved from mc-router."""

class RouteApplyError(RuntimeError):
    """Raised when mc-router rejects a single route add/update/delete call."""
