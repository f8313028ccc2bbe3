import os
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

from router_sync.logger import logger

# (mtime_ns, size), or None while the file does not exist
FileSignature = Optional[Tuple[int, int]]


class ConfigWatcher:
    def __init__(self, path: Path, interval: float = 1.0) -> None:
        logger.debug(f"[config_watcher] Initializing config watcher for {path}")
        self.path = Path(path)
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def subscribe(self, callback: Callable[[], None]) -> None:
        """
        Invoke `callback` every time the config file changes.
        This runs in a background thread.
        """
        if self._thread and self._thread.is_alive():
            return
        logger.info(f"[config_watcher] Watching {self.path} for changes")
        self._stop_event.clear()
        # Baseline is fixed before subscribe() returns
        baseline = self.signature()
        self._thread = threading.Thread(target=self._watch, args=(callback, baseline), daemon=True)
        self._thread.start()

    def signature(self) -> FileSignature:
        try:
            stat = os.stat(self.path)
        except FileNotFoundError:
            return None
        return (stat.st_mtime_ns, stat.st_size)

    def _watch(self, callback: Callable[[], None], last: FileSignature) -> None:
        while not self._stop_event.wait(self.interval):
            current = self.signature()
            if current == last:
                continue
            last = current
            logger.info(f"[config_watcher] {self.path} changed. Triggering synchronization.")
            try:
                callback()
            except Exception as e:
                logger.exception(f"[config_watcher] Change handler failed: {e}")
        logger.info("[config_watcher] Stopping config watch loop")

    def stop(self) -> None:
        logger.info("[config_watcher] Stopping config watcher")
        self._stop_event.set()
