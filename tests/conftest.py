import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest
import yaml

from router_sync.config import Settings
from router_sync.core.container_record import ContainerRecord
from router_sync.utils.errors import DiscoveryError, RouteApplyError, RouterFetchError


# =============================================================================
# Fake mc-router
# =============================================================================


class FakeRouteRegistry:
    """In-memory mc-router with call tracking."""

    def __init__(
        self,
        routes: Optional[Dict[str, str]] = None,
        fail_list: bool = False,
        failing_addresses: Optional[Set[str]] = None,
        call_delay: float = 0.0,
    ):
        self.routes: Dict[str, str] = dict(routes or {})
        self.fail_list = fail_list
        self.failing_addresses = failing_addresses or set()
        self.call_delay = call_delay
        self.list_calls = 0
        self.register_calls: List[tuple] = []
        self.remove_calls: List[str] = []
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def list(self) -> Dict[str, str]:
        time.sleep(self.call_delay)
        with self._lock:
            self.list_calls += 1
            if self.fail_list:
                raise RouterFetchError("mc-router unreachable")
            return dict(self.routes)

    def register(self, server_address: str, backend: str) -> None:
        time.sleep(self.call_delay)
        with self._lock:
            self.register_calls.append((server_address, backend))
            self.calls.append(("register", server_address))
            if server_address in self.failing_addresses:
                raise RouteApplyError(f"Failed to add route for {server_address}. Status: 500")
            self.routes[server_address] = backend

    def remove(self, server_address: str) -> None:
        time.sleep(self.call_delay)
        with self._lock:
            self.remove_calls.append(server_address)
            self.calls.append(("remove", server_address))
            if server_address in self.failing_addresses:
                raise RouteApplyError(f"Failed to delete route for {server_address}. Status: 500")
            self.routes.pop(server_address, None)

    def reset_calls(self) -> None:
        self.list_calls = 0
        self.register_calls = []
        self.remove_calls = []
        self.calls = []


# =============================================================================
# Fake Docker discovery
# =============================================================================


class FakeDiscovery:
    def __init__(self, records: Optional[List[ContainerRecord]] = None, fail: bool = False):
        self.records = records or []
        self.fail = fail
        self.calls = 0

    def list_container_records(self) -> List[ContainerRecord]:
        self.calls += 1
        if self.fail:
            raise DiscoveryError("Failed to list Docker containers: connection refused")
        return list(self.records)

    def close(self) -> None:
        pass


# =============================================================================
# Helpers
# =============================================================================


def make_container(
    slugs: Optional[str],
    public_port: Optional[int] = 25565,
    name: str = "mc",
    label: str = "router.slug",
) -> ContainerRecord:
    labels = {label: slugs} if slugs is not None else {}
    ports = [{"PrivatePort": 25565, "PublicPort": public_port, "Type": "tcp"}] if public_port else []
    return ContainerRecord(id=f"id-{name}", name=name, labels=labels, ports=ports)


def write_config(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.yml"


@pytest.fixture
def settings(config_path: Path) -> Settings:
    return Settings(
        config_path=config_path,
        docker_host_ip="192.168.1.10",
        slug_label="router.slug",
        poll_interval=0.05,
        config_watch_interval=0.02,
    )
