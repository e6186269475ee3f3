"""Console logging setup for the request executor."""

import logging

__all__ = ["configure_logs"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"


def configure_logs(level: str = "INFO") -> None:
    """Send log records to stderr, keeping stdout free for results.

    Only the ``reqcore`` loggers follow ``level``; everything else,
    aiohttp connection chatter included, is held at WARNING so a batch
    run prints one line per request rather than per socket event.

    Args:
        level: Standard level name for the reqcore loggers. The runner
            calls this before settings exist and adjusts the level later.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    root.addHandler(handler)

    for name in ("aiohttp", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("reqcore").setLevel(level)
