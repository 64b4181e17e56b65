"""Background discovery worker streaming batches of applications."""

import logging
import threading
import time
from typing import Iterable, Protocol, Sequence

from app_picker.metadata import build_item
from app_picker.models import DiscoveredItem, ScanStats, WorkerState
from app_picker.rules import DEFAULT_RULES, TARGET_EXTENSION, ExclusionRules, is_candidate
from app_picker.walker import SearchFrontier, list_directory

logger = logging.getLogger(__name__)

# Files filtered and enriched between two dispatches
BATCH_SIZE = 50

# Pause after each dispatch so the consumer gets a chance to run
IDLE_YIELD_SECONDS = 0.005


class BatchSink(Protocol):
    """Consumer of discovery results."""

    def on_batch_ready(self, items: Sequence[DiscoveredItem]) -> None:
        """Receive up to BATCH_SIZE items. The sequence must not be kept or mutated."""

    def on_completed(self) -> None:
        """Called once when the scan finished without cancellation."""


class DiscoveryWorker:
    """
    One discovery session running on a dedicated thread.

    The worker owns its frontier and state. Suspension and cancellation are
    cooperative: a suspend request blocks the worker at the next batch
    boundary, a cancel request stops it at the next file or boundary and
    discards the batch in progress.

    Example:
        >>> worker = DiscoveryWorker(["C:/Games"], catalog)
        >>> worker.start()
        >>> worker.suspend(); worker.resume()
        >>> worker.cancel(); worker.join()
    """

    def __init__(
        self,
        roots: Iterable[str],
        sink: BatchSink,
        *,
        seed_files: Iterable[str] = (),
        rules: ExclusionRules = DEFAULT_RULES,
        extension: str = TARGET_EXTENSION,
        extract_icons: bool = True,
        idle_yield: float = IDLE_YIELD_SECONDS,
        batch_size: int = BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")

        self._frontier = SearchFrontier(roots)
        self._seed_files = list(seed_files)
        self._sink = sink
        self._rules = rules
        self._extension = extension
        self._extract_icons = extract_icons
        self._idle_yield = idle_yield
        self._batch_size = batch_size

        self._condition = threading.Condition()
        self._state = WorkerState.RUNNING
        self._thread: threading.Thread | None = None
        self.stats = ScanStats()

    @property
    def state(self) -> WorkerState:
        with self._condition:
            return self._state

    def start(self) -> None:
        """Start the background thread (once per worker)."""
        if self._thread is not None:
            raise RuntimeError("A discovery worker can only be started once")
        self._thread = threading.Thread(target=self._run, name="app-discovery", daemon=True)
        self._thread.start()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread to finish; returns True if it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def suspend(self) -> None:
        self._transition(WorkerState.SUSPENDED, allowed_from=(WorkerState.RUNNING,))

    def resume(self) -> None:
        self._transition(WorkerState.RUNNING, allowed_from=(WorkerState.SUSPENDED,))

    def cancel(self) -> None:
        self._transition(WorkerState.CANCELLED, allowed_from=(WorkerState.RUNNING, WorkerState.SUSPENDED))

    def _transition(self, target: WorkerState, allowed_from: tuple[WorkerState, ...]) -> bool:
        with self._condition:
            if self._state not in allowed_from:
                return False
            logger.debug("Worker %s -> %s", self._state.value, target.value)
            self._state = target
            self._condition.notify_all()
            return True

    def _checkpoint(self) -> bool:
        """Batch boundary: block while suspended; False once cancelled."""
        with self._condition:
            while self._state == WorkerState.SUSPENDED:
                self._condition.wait()
            return self._state == WorkerState.RUNNING

    def _cancelled(self) -> bool:
        with self._condition:
            return self._state == WorkerState.CANCELLED

    def _run(self) -> None:
        try:
            finished = self._scan()
        except Exception:
            logger.exception("Discovery worker failed")
            self._transition(WorkerState.CANCELLED, allowed_from=(WorkerState.RUNNING, WorkerState.SUSPENDED))
            return

        if not finished:
            logger.debug("Discovery cancelled after %d batches", self.stats.batches)
            return

        if self._transition(WorkerState.COMPLETED, allowed_from=(WorkerState.RUNNING,)):
            logger.debug(
                "Discovery completed: %d directories, %d candidates",
                self.stats.directories_visited,
                self.stats.candidates,
            )
            self._sink.on_completed()

    def _scan(self) -> bool:
        if self._seed_files and not self._process_files(self._seed_files):
            return False

        while self._frontier:
            if self._cancelled():
                return False

            listing = list_directory(self._frontier.pop(), self._extension)
            if not listing.accessible:
                self.stats.directories_skipped += 1
                continue

            self.stats.directories_visited += 1
            if not self._process_files(listing.files):
                return False

            for subdir in listing.subdirs:
                self._frontier.add(subdir)

        # Completion is only reached from RUNNING
        return self._checkpoint()

    def _process_files(self, files: list[str]) -> bool:
        """Filter, enrich and dispatch ``files`` in batches; False if cancelled."""
        for offset in range(0, len(files), self._batch_size):
            if not self._checkpoint():
                return False

            batch = []
            for path in files[offset:offset + self._batch_size]:
                if self._cancelled():
                    # Partial batch is discarded
                    return False
                self.stats.files_seen += 1
                if is_candidate(path, self._rules, self._extension):
                    batch.append(build_item(path, extract_icons=self._extract_icons))

            if self._cancelled():
                return False

            self.stats.candidates += len(batch)
            self.stats.batches += 1
            self._dispatch(tuple(batch))
            time.sleep(self._idle_yield)

        return True

    def _dispatch(self, items: tuple[DiscoveredItem, ...]) -> None:
        try:
            self._sink.on_batch_ready(items)
        except Exception:
            logger.exception("Result sink rejected a batch of %d items", len(items))
