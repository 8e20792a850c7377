import time
from typing import Any

from textdetect.config.settings import Settings
from textdetect.logging.logger import Log
from textdetect.queue.sqs_queue import SqsQueue
from textdetect.worker.job_runner import JobRunner


class Worker:
    """Poll loop: receive -> dispatch -> sleep when idle."""

    def __init__(
        self,
        queue: SqsQueue,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._queue = queue
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after handling that many messages (for testing).
        """
        Log.info(f"Worker started, polling {self._queue.queue_url}")
        jobs_done = 0
        try:
            while True:
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                raw_message = self._try_receive()
                if raw_message:
                    self._job_runner.run(raw_message)
                    jobs_done += 1
                else:
                    Log.debug("No messages available, sleeping")
                    time.sleep(self._settings.queue_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _try_receive(self) -> dict[str, Any] | None:
        """Attempt to receive the next message. Gracefully handle queue errors."""
        try:
            return self._queue.receive()
        except Exception as exc:
            Log.warning(f"Queue error, will retry: {exc}")
            return None
