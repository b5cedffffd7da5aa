import queue
from typing import Any, Callable, Optional, Set

from PySide6.QtCore import QRunnable, QThread, QThreadPool

from ..utils import get_logger
from .messages import Message

ResultMapper = Callable[[Any], Message]
ErrorMapper = Callable[[Exception], Message]

# Requests carry no timeout, so a queued job could wait forever behind a stuck one.
MAX_JOBS_IN_FLIGHT = 256


class Worker(QRunnable):
    """Runs one blocking job on the pool and posts exactly one message."""

    def __init__(
        self,
        fn: Callable[[], Any],
        channel: "queue.Queue[Message]",
        on_result: ResultMapper,
        on_error: ErrorMapper,
        on_finished: Optional[Callable[["Worker"], None]] = None,
    ) -> None:
        super().__init__()
        self.fn = fn
        self.channel = channel
        self.on_result = on_result
        self.on_error = on_error
        self.on_finished = on_finished
        self.logger = get_logger("rmtui.worker")

    def run(self) -> None:
        self.logger.debug("Worker start thread=%s", QThread.currentThread())
        try:
            try:
                result = self.fn()
            except Exception as exc:
                self.logger.warning("Worker error thread=%s exc=%s", QThread.currentThread(), exc)
                message = self.on_error(exc)
            else:
                self.logger.debug("Worker result thread=%s", QThread.currentThread())
                message = self.on_result(result)
            # Blocks while the channel is full; the event loop drains it every tick.
            self.channel.put(message)
        finally:
            self.logger.debug("Worker finished thread=%s", QThread.currentThread())
            if self.on_finished:
                self.on_finished(self)


class TaskRunner:
    def __init__(self, channel: "queue.Queue[Message]", pool: Optional[QThreadPool] = None) -> None:
        self.channel = channel
        if pool is None:
            pool = QThreadPool()
            pool.setMaxThreadCount(MAX_JOBS_IN_FLIGHT)
        self.pool = pool
        self.logger = get_logger("rmtui.worker")
        self._workers: Set[Worker] = set()

    def run(
        self,
        fn: Callable[[], Any],
        on_result: ResultMapper,
        on_error: ErrorMapper,
    ) -> Worker:
        worker = Worker(fn, self.channel, on_result, on_error, on_finished=self._workers.discard)
        self._workers.add(worker)
        self.logger.debug("TaskRunner start worker thread=%s", QThread.currentThread())
        self.pool.start(worker)
        return worker

    def wait(self, msecs: int = -1) -> bool:
        return self.pool.waitForDone(msecs)

    def shutdown(self) -> None:
        # Running jobs keep their thread until the request returns; queued ones are dropped.
        self.pool.clear()
