"""Console logging setup for the platform client."""

import logging

__all__ = ["configure_logs"]

_HANDLER_NAME = "platform-client-console"


def configure_logs(level: int | str = logging.INFO) -> None:
    """Configure console logging.

    Sets up:
    - Root logger at WARNING level.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (src) at the requested level.
    - Structured format with timestamp, level, module, and line number.

    Calling it more than once does not stack handlers.

    Args:
        level: Level name or number for application loggers.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(log_format, date_format))
        root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("src").setLevel(level)
