"""Queue-backed logging that never blocks the frame loop."""

from __future__ import annotations

from logging.handlers import QueueHandler, QueueListener
import logging
import queue

LOGGER_NAME = "canvaspong"
DEFAULT_QUEUE_SIZE = 256
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DroppingQueueHandler(QueueHandler):
    """Queue handler that discards records instead of waiting for space."""

    def __init__(self, log_queue: queue.Queue) -> None:
        super().__init__(log_queue)
        self.dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self.dropped += 1


class BlockingSentinelListener(QueueListener):
    """Listener whose stop sentinel waits for room in a bounded queue."""

    def enqueue_sentinel(self) -> None:
        self.queue.put(self._sentinel)


_listener: BlockingSentinelListener | None = None
_handler: DroppingQueueHandler | None = None


def configure_logging(
    level: int | str = logging.INFO,
    capacity: int = DEFAULT_QUEUE_SIZE,
    *targets: logging.Handler,
) -> DroppingQueueHandler:
    """Route package logs through a bounded queue drained by a background listener.

    Records go to ``targets`` when given, otherwise to a stderr stream handler.
    """
    global _listener, _handler
    shutdown_logging()

    log_queue: queue.Queue = queue.Queue(maxsize=max(1, capacity))
    if not targets:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        targets = (stream,)

    _handler = DroppingQueueHandler(log_queue)
    _listener = BlockingSentinelListener(log_queue, *targets, respect_handler_level=True)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)
    package_logger.addHandler(_handler)
    package_logger.propagate = False

    _listener.start()
    return _handler


def shutdown_logging() -> None:
    """Flush and stop the background listener if one is running.

    Only called once ticking has stopped, so waiting on a full queue is fine.
    """
    global _listener, _handler
    try:
        if _listener is not None:
            _listener.stop()
    finally:
        _listener = None
        package_logger = logging.getLogger(LOGGER_NAME)
        if _handler is not None:
            package_logger.removeHandler(_handler)
            _handler = None
            package_logger.propagate = True


def log_message(message: str, name: str) -> None:
    """Emit a diagnostic line tagged with the session name."""
    logging.getLogger(f"{LOGGER_NAME}.session").info("[%s] %s", name, message)
