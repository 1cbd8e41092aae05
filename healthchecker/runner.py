from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Sequence

from healthchecker.checks.http_check import run_http
from healthchecker.checks.results import CheckResult
from healthchecker.state import StatusStore

logger = logging.getLogger(__name__)


def _check_and_store(store: StatusStore, url: str, timeout_s: float) -> None:
    try:
        res = run_http(url, timeout_s=timeout_s)
    except Exception as e:
        # A broken check must never stop the sweep for the other targets.
        logger.exception("Unexpected error while checking %s", url)
        res = CheckResult(url=url, up=False, error=e.__class__.__name__)
    store.put(res)


def run_once(
    store: StatusStore,
    targets: Sequence[str],
    timeout_s: float,
    executor: ThreadPoolExecutor | None = None,
    stop_event: threading.Event | None = None,
) -> None:
    if not targets:
        return

    if executor is None:
        for url in targets:
            if stop_event is not None and stop_event.is_set():
                break
            _check_and_store(store, url, timeout_s)
        return

    futures = [executor.submit(_check_and_store, store, url, timeout_s) for url in targets]
    wait(futures)


def loop_forever(
    store: StatusStore,
    targets: Sequence[str],
    interval_s: float,
    timeout_s: float,
    stop_event: threading.Event,
    executor: ThreadPoolExecutor | None = None,
) -> int:
    sweeps = 0
    while not stop_event.is_set():
        start = time.perf_counter()
        try:
            run_once(store, targets, timeout_s, executor=executor, stop_event=stop_event)
        except Exception:
            if stop_event.is_set():
                break
            logger.exception("Sweep failed")
        sweeps += 1
        elapsed = time.perf_counter() - start
        logger.debug("Sweep %d over %d targets took %.3fs", sweeps, len(targets), elapsed)
        sleep_s = max(0.0, interval_s - elapsed)
        stop_event.wait(sleep_s)
    return sweeps


class Scheduler:
    """Runs a sweep over all targets immediately, then every ``interval_s``.

    Sweeps run on a single background thread so they never overlap; the
    probes inside one sweep are spread over a small thread pool.
    """

    def __init__(
        self,
        store: StatusStore,
        targets: Sequence[str],
        interval_s: float = 10.0,
        timeout_s: float = 3.0,
        workers: int = 4,
    ) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s}")
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {timeout_s}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.store = store
        self.targets = list(targets)
        self.interval_s = interval_s
        self.timeout_s = timeout_s
        self.workers = workers
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return

        self._stop_event.clear()
        pool_size = min(self.workers, len(self.targets))
        if pool_size > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=pool_size, thread_name_prefix="health-probe"
            )

        self._thread = threading.Thread(
            target=loop_forever,
            args=(
                self.store,
                self.targets,
                self.interval_s,
                self.timeout_s,
                self._stop_event,
                self._executor,
            ),
            name="health-scheduler",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Scheduler started: %d targets every %ss (timeout %ss)",
            len(self.targets),
            self.interval_s,
            self.timeout_s,
        )

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._executor is not None:
            # In-flight probes are abandoned; queued ones never start.
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # Keep the handle so start() cannot launch a second sweep thread.
                logger.warning("Scheduler thread still finishing a sweep after stop")
                return
            self._thread = None
        logger.info("Scheduler stopped")
