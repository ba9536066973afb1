"""
Logging setup for the diskmon process.

Adds TRACE and CRASH levels on top of the standard ones, optionally moves
record handling onto a background QueueListener, and attaches the Airbrake
handler when credentials are configured.
"""

import logging
import logging.handlers
import queue
import sys

from diskmon.airbrake import AirbrakeHandler
from diskmon.config.configs import LoggerConfig

TRACE = 5
CRASH = 60

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(CRASH, "CRASH")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Config level names mapped to logging levels
LEVELS = {
    "CRASH": CRASH,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "TRACE": TRACE,
}
DEFAULT_LEVEL = "INFO"

logger = logging.getLogger("diskmon")


def crash(msg: str, *args, **kwargs) -> None:
    """Log msg at CRASH level on the diskmon logger."""
    logger.log(CRASH, msg, *args, **kwargs)


class DroppingQueueHandler(logging.handlers.QueueHandler):
    """
    QueueHandler for a bounded queue that never blocks the caller.

    Records that do not fit are counted instead of going through
    handleError, and a single summary record is queued once there is room
    again.
    """

    def __init__(self, records: queue.Queue) -> None:
        super().__init__(records)
        self.dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self.dropped += 1
            return
        if self.dropped:
            self.report_dropped()

    def report_dropped(self) -> None:
        """Queue one WARNING record for the records dropped so far."""
        count, self.dropped = self.dropped, 0
        summary = logging.LogRecord(
            logger.name,
            logging.WARNING,
            __file__,
            0,
            "dropped %d log record(s), queue full",
            (count,),
            None,
        )
        try:
            self.queue.put_nowait(self.prepare(summary))
        except queue.Full:
            self.dropped += count


class LoggingHandle:
    """Owns the handlers installed by setup_logging()."""

    def __init__(
        self,
        handlers: list[logging.Handler],
        listener: logging.handlers.QueueListener | None = None,
        queue_handler: DroppingQueueHandler | None = None,
    ) -> None:
        self.handlers = handlers
        self.listener = listener
        self.queue_handler = queue_handler

    def flush(self) -> None:
        """Drain queued records and flush every handler."""
        if self.queue_handler is not None:
            self.queue_handler.acquire()
            try:
                if self.queue_handler.dropped:
                    self.queue_handler.report_dropped()
            finally:
                self.queue_handler.release()
        if self.listener is not None:
            # stop() processes everything still queued before returning
            self.listener.stop()
            self.listener.start()
        for handler in self.handlers:
            handler.flush()

    def close(self) -> None:
        if self.listener is not None:
            self.listener.stop()
            self.listener = None
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
        for handler in self.handlers:
            handler.close()


def build_handlers(config: LoggerConfig) -> list[logging.Handler]:
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers: list[logging.Handler] = [stream]

    if config.airbrake_enabled:
        handlers.append(
            AirbrakeHandler(
                host=config.airbrake_host,
                project_id=config.airbrake_project_id,
                project_key=config.airbrake_project_key,
                environment=config.airbrake_environment,
            )
        )
    return handlers


def setup_logging(config: LoggerConfig) -> LoggingHandle:
    """
    Configure the diskmon logger from config.

    Args:
        config: Validated logger configuration

    Returns:
        Handle used to flush and close logging before exit
    """
    level = LEVELS[config.level or DEFAULT_LEVEL]
    handlers = build_handlers(config)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    listener = None
    queue_handler = None
    if config.is_async:
        records: queue.Queue = queue.Queue(maxsize=config.chan_size or 0)
        queue_handler = DroppingQueueHandler(records)
        logger.addHandler(queue_handler)
        listener = logging.handlers.QueueListener(records, *handlers, respect_handler_level=True)
        listener.start()
    else:
        for handler in handlers:
            logger.addHandler(handler)

    return LoggingHandle(handlers, listener, queue_handler)
