"""Centralized logging configuration for toolpick.

All modules obtain loggers through ``get_logger(__name__)`` so that output is
namespaced under the ``toolpick`` logger. Handlers are only attached by
``setup_logging``, which the CLI calls once at startup; library users keep
full control over logging when they embed the service.
"""

import logging
import sys

ROOT_LOGGER_NAME = "toolpick"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_VERBOSE_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - "
    "%(message)s"
)

# Third-party loggers that are noisy at INFO level
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "semantic_kernel", "urllib3")


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the toolpick namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure console logging for toolpick.

    Args:
        verbose: Enable DEBUG level with file/line information.
        quiet: Only show warnings and errors. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
        fmt = _VERBOSE_LOG_FORMAT
    elif quiet:
        level = logging.WARNING
        fmt = _LOG_FORMAT
    else:
        level = logging.INFO
        fmt = _LOG_FORMAT

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace handlers so repeated calls do not duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    root.propagate = False

    third_party_level = logging.DEBUG if verbose else logging.WARNING
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(third_party_level)
