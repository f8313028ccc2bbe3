from typing import Any, Dict, List, Optional

import docker
import requests
from docker.errors import DockerException

from router_sync.core.container_record import ContainerRecord
from router_sync.logger import logger
from router_sync.utils.errors import DiscoveryError


class DockerDiscovery:
    def __init__(self, socket_path: str, client: Optional[docker.DockerClient] = None) -> None:
        logger.debug(f"[docker_discovery] Initializing Docker discovery on {socket_path}")
        self.base_url = f"unix://{socket_path}"
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        # Connecting queries the daemon version, so defer it until the first listing
        if self._client is None:
            self._client = docker.DockerClient(base_url=self.base_url)
        return self._client

    def list_container_records(self) -> List[ContainerRecord]:
        """
        List running containers with their labels and published ports.

        Raises DiscoveryError when the daemon cannot be reached or answers with an error.
        """
        try:
            summaries = self.client.api.containers()
        except (DockerException, requests.exceptions.RequestException) as e:
            # docker-py lets transport errors through once the client is connected
            raise DiscoveryError(f"Failed to list Docker containers: {e}") from e

        records = [self._build_container_record(summary) for summary in summaries]
        logger.debug(f"[docker_discovery] Found {len(records)} running containers")
        return records

    def _build_container_record(self, summary: Dict[str, Any]) -> ContainerRecord:
        names = summary.get("Names") or []
        name = names[0].lstrip("/") if names else None
        return ContainerRecord(
            id=summary.get("Id"),
            name=name,
            labels=summary.get("Labels") or {},
            ports=summary.get("Ports") or [],
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
