from typing import Dict, Optional
from urllib.parse import quote

import requests

from router_sync.interfaces.route_registry import RouteRegistry
from router_sync.logger import logger
from router_sync.utils.errors import RouteApplyError, RouterFetchError


def _succeeded(response: requests.Response) -> bool:
	return 200 <= response.status_code < 300


class McRouterRegistry(RouteRegistry):
	def __init__(self, api_url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
		self.api_url = api_url.rstrip("/")
		self.timeout = timeout
		self.session = session or requests.Session()

	def list(self) -> Dict[str, str]:
		try:
			response = self.session.get(
				f"{self.api_url}/routes",
				headers={"Accept": "application/json"},
				timeout=self.timeout,
			)
		except requests.exceptions.RequestException as e:
			raise RouterFetchError(f"Error connecting to mc-router API: {e}") from e

		if not _succeeded(response):
			raise RouterFetchError(f"Failed to get mc-router routes. Status: {response.status_code}")

		try:
			routes = response.json()
		except ValueError as e:
			raise RouterFetchError(f"mc-router returned an unparseable route list: {e}") from e

		if not isinstance(routes, dict):
			raise RouterFetchError(f"mc-router returned {type(routes).__name__} instead of a route mapping")

		return {str(address): str(backend) for address, backend in routes.items()}

	def register(self, server_address: str, backend: str) -> None:
		logger.info(f"[mc_router] Adding/Updating route: {server_address} -> {backend}")
		try:
			response = self.session.post(
				f"{self.api_url}/routes",
				json={"serverAddress": server_address, "backend": backend},
				timeout=self.timeout,
			)
		except requests.exceptions.RequestException as e:
			raise RouteApplyError(f"Error adding route for {server_address}: {e}") from e

		if not _succeeded(response):
			raise RouteApplyError(f"Failed to add route for {server_address}. Status: {response.status_code}")

	def remove(self, server_address: str) -> None:
		logger.info(f"[mc_router] Deleting route: {server_address}")
		try:
			response = self.session.delete(
				f"{self.api_url}/routes/{quote(server_address, safe='')}",
				timeout=self.timeout,
			)
		except requests.exceptions.RequestException as e:
			raise RouteApplyError(f"Error deleting route for {server_address}: {e}") from e

		if not _succeeded(response):
			raise RouteApplyError(f"Failed to delete route for {server_address}. Status: {response.status_code}")

	def close(self) -> None:
		self.session.close()
