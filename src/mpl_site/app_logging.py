"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "mpl_site"
_HANDLER_NAME = "mpl_site.stderr"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route client logs to stderr at ``level``.

    Repeated calls only change the level. httpx request lines are shown only
    at DEBUG.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if logger.level <= logging.DEBUG else logging.WARNING
    )
    logger.propagate = False
    if any(handler.name == _HANDLER_NAME for handler in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
