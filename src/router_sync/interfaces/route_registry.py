from typing import Dict, Protocol


class RouteRegistry(Protocol):
    def list(self) -> Dict[str, str]:
        """
        Return the current route name -> backend mapping.

        Raises RouterFetchError when the mapping cannot be retrieved.
        """
        ...

    def register(self, server_address: str, backend: str) -> None:
        """Add or update a route. Raises RouteApplyError on failure."""
        ...

    def remove(self, server_address: str) -> None:
        """Delete a route. Raises RouteApplyError on failure."""
        ...
