"""Logging setup for the form intake service"""

import logging
import sys
from typing import Optional, Union

from form_intake.config import config

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "urllib3", "httpx")


class BelowWarningFilter(logging.Filter):
    """Pass DEBUG and INFO records only; WARNING and above go to stderr"""

    def filter(self, record):
        return record.levelno < logging.WARNING


class ComponentAdapter(logging.LoggerAdapter):
    """Prefix every message with a component tag, e.g. ``[submit-form]``"""

    def process(self, msg, kwargs):
        return f"[{self.extra['component']}] {msg}", kwargs


def setup_logging(log_level: Optional[str] = None):
    """
    Route INFO/DEBUG to stdout and WARNING/ERROR to stderr.

    Args:
        log_level: Overrides the level from application config when given
    """
    level_name = (log_level or config.get("log_level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(BelowWarningFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentAdapter]:
    """
    Get a logger for the given module name.

    Args:
        name: Usually __name__ from the calling module
        component: Optional tag prepended to every message as ``[component]``

    Returns:
        Logger, or a ComponentAdapter when a component is given
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentAdapter(logger, {"component": component})
    return logger
