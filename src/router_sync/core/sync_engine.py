import threading
from enum import Enum
from typing import List, Optional

from router_sync.config import Settings, load_settings
from router_sync.core.config_watcher import ConfigWatcher
from router_sync.core.container_record import ContainerRecord
from router_sync.core.docker_discovery import DockerDiscovery
from router_sync.core.route_builder import get_desired_routes
from router_sync.core.route_config import RouteConfig, load_route_config
from router_sync.core.route_reconciler import apply_plan, reconcile
from router_sync.interfaces.route_registry import RouteRegistry
from router_sync.logger import logger
from router_sync.utils.errors import ConfigError, DiscoveryError, RouterFetchError


class CycleOutcome(str, Enum):
    APPLIED = "applied"
    NO_CHANGES = "no_changes"
    SKIPPED = "skipped"


class SyncEngine:
    def __init__(
        self,
        registry: RouteRegistry,
        discovery: DockerDiscovery,
        settings: Optional[Settings] = None,
        watcher: Optional[ConfigWatcher] = None,
    ):
        self.registry = registry
        self.discovery = discovery
        self.settings = settings or load_settings()
        self.watcher = watcher or ConfigWatcher(
            self.settings.config_path, interval=self.settings.config_watch_interval
        )
        self.running = False
        # Diagnostics only, never consulted when computing routes
        self.last_config: Optional[RouteConfig] = None
        self._wakeup = threading.Event()
        self._cycle_lock = threading.Lock()

    def run_cycle(self) -> CycleOutcome:
        """Run one build -> fetch -> diff -> apply pass."""
        if self.settings.exclusive_cycles:
            if not self._cycle_lock.acquire(blocking=False):
                logger.debug("[sync_engine] Cycle already in progress, skipping trigger")
                return CycleOutcome.SKIPPED
            try:
                return self._sync()
            finally:
                self._cycle_lock.release()
        return self._sync()

    def _sync(self) -> CycleOutcome:
        logger.info("[sync_engine] Starting synchronization cycle...")

        try:
            config = load_route_config(self.settings.config_path)
        except ConfigError as e:
            logger.warning(f"[sync_engine] Synchronization skipped: {e}")
            return CycleOutcome.SKIPPED
        self.last_config = config

        records: List[ContainerRecord]
        try:
            records = self.discovery.list_container_records()
        except DiscoveryError as e:
            logger.error(f"[sync_engine] {e}. Continuing with manual routes only.")
            records = []

        desired = get_desired_routes(
            config,
            records,
            host_ip=self.settings.docker_host_ip,
            slug_label=self.settings.slug_label,
        )

        try:
            actual = self.registry.list()
        except RouterFetchError as e:
            logger.warning(f"[sync_engine] Synchronization skipped: could not retrieve current routes ({e})")
            return CycleOutcome.SKIPPED

        plan = reconcile(desired, actual)
        if plan.is_empty():
            logger.info("[sync_engine] Synchronization complete. No changes detected.")
            return CycleOutcome.NO_CHANGES

        result = apply_plan(self.registry, plan)
        if result.failed:
            logger.warning(
                f"[sync_engine] {len(result.failed)} route change(s) failed and will be retried next cycle: "
                f"{', '.join(result.failed)}"
            )
        logger.info(
            f"[sync_engine] Synchronization complete. Changes were applied "
            f"({len(result.upserted)} upserted, {len(result.removed)} removed)."
        )
        return CycleOutcome.APPLIED

    def run(self) -> None:
        self.running = True
        self._wakeup.clear()
        self.watcher.subscribe(self.run_cycle)
        logger.info(
            f"[sync_engine] Service started. Watching {self.settings.config_path} and polling Docker "
            f"every {self.settings.poll_interval}s."
        )

        # First pass runs straight away, then every poll_interval
        while self.running:
            try:
                self.run_cycle()
            except Exception as e:
                logger.exception(f"[sync_engine] Sync error: {e}")

            if self._wakeup.wait(self.settings.poll_interval):
                break
            logger.info("[sync_engine] Polling Docker for container changes...")

    def stop(self) -> None:
        self.running = False
        self._wakeup.set()
        self.watcher.stop()
        logger.info("[sync_engine] Graceful shutdown initiated.")
