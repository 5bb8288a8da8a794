"""femtologging helpers shared by the controller.

Every module logs through these wrappers so that messages are formatted
before they reach the femtologging worker thread.

Example:
>>> from brigade_ci.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Routing %s event", "push")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log level names accepted by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return the canonical level name and whether the input was rejected.

    Parameters
    ----------
    level : str | None
        Raw level string, typically from ``BRIGADE_CI_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        The level to use and ``True`` when ``level`` was missing or unknown
        (in which case ``INFO`` is returned).

    """
    if not level:
        return ("INFO", True)

    candidate = level.strip().upper()
    if candidate in LogLevel.__members__:
        return (candidate, False)
    return ("INFO", True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Install the femtologging root configuration at ``level``.

    Parameters
    ----------
    level : str
        Raw level string.
    force : bool, optional
        Replace handlers that are already configured.

    Returns
    -------
    tuple[str, bool]
        Same contract as :func:`normalize_log_level`.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into a percent-style ``template``."""
    return template % args


class _SupportsLog(typ.Protocol):
    """The subset of the femtologging logger API used here."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: str,
    message: str,
    *,
    exc_info: object | None = None,
) -> None:
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log ``template % args`` at INFO."""
    _emit(logger, "INFO", format_log_message(template, *args), exc_info=exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log ``template % args`` at WARNING."""
    _emit(logger, "WARNING", format_log_message(template, *args), exc_info=exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log ``template % args`` at ERROR.

    Parameters
    ----------
    logger : _SupportsLog
        Destination logger.
    template : str
        Percent-style message template.
    *args : object
        Values interpolated into ``template``.
    exc_info : object | None, optional
        Exception to attach to the record.

    """
    _emit(logger, "ERROR", format_log_message(template, *args), exc_info=exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Log a pre-formatted ``message`` at ERROR with ``exc`` attached."""
    _emit(logger, "ERROR", message, exc_info=exc)


__all__ = [
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
