"""Background sampling thread for the coreprobe Textual app."""

import logging
import threading
import time
from queue import Queue

from coreprobe.config import MIN_INTERVAL
from coreprobe.models import ProbeSnapshot
from coreprobe.sampler import FrequencySampler, ProcessEnumerator

logger = logging.getLogger(__name__)


class ProbeMonitor:
    """
    Runs both samplers in a daemon thread and pushes ProbeSnapshots to a Queue.

    Sampling calls are made one after the other on that single thread, so
    no two samples are ever in flight at the same time.
    """

    def __init__(
        self,
        update_queue: Queue[ProbeSnapshot],
        frequency_sampler: FrequencySampler,
        process_enumerator: ProcessEnumerator,
        interval: float = 1.0,
    ) -> None:
        """
        Initialize the ProbeMonitor.

        Args:
            update_queue: Thread-safe queue to push snapshots to.
            frequency_sampler: Source of per-core frequency samples.
            process_enumerator: Source of process snapshots.
            interval: Seconds between sampling cycles. Default 1.0s.
        """
        self._queue = update_queue
        self._frequency_sampler = frequency_sampler
        self._process_enumerator = process_enumerator
        self._interval = max(MIN_INTERVAL, interval)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        """Get the current sampling interval."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        """Set the sampling interval."""
        self._interval = max(MIN_INTERVAL, value)

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="ProbeMonitor",
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def collect(self) -> ProbeSnapshot:
        """Take one frequency sample and one process snapshot."""
        return ProbeSnapshot(
            frequencies=self._frequency_sampler.sample(),
            processes=self._process_enumerator.enumerate(),
            timestamp=time.time(),
        )

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            try:
                self._queue.put(self.collect())
            except Exception:
                # Keep the loop alive; the next cycle samples from scratch
                logger.exception("Sampling cycle failed")

            self._stop_event.wait(timeout=self._interval)
