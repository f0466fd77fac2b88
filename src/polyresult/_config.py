"""Library configuration: Config, init and get_config."""

from __future__ import annotations

import os
from dataclasses import dataclass

from polyresult._logging import configure_logging, get_logger

__all__ = [
    'Config',
    'get_config',
    'init',
]

_log = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    """Configuration for polyresult.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Emit JSON logs if True, console logs otherwise.
        capture: Exception types captured by try_catch, wrap and from_awaitable
            when no explicit ``exceptions`` argument is given.
    """

    log_level: str | None = None
    json_logs: bool = True
    capture: tuple[type[BaseException], ...] = (Exception,)


_DEFAULT = Config()

# Global configuration (set by init())
_config: Config | None = None


def _detect_log_level() -> str | None:
    """Read POLYRESULT_LOG_LEVEL, None when unset or empty."""
    level = os.environ.get('POLYRESULT_LOG_LEVEL', '').strip()
    return level.upper() or None


def _detect_json_logs() -> bool:
    """Read POLYRESULT_LOG_FORMAT ("json" or "console"), defaulting to JSON."""
    fmt = os.environ.get('POLYRESULT_LOG_FORMAT', '').strip().lower()
    if fmt == 'console':
        return False
    if fmt and fmt != 'json':
        _log.warning('unknown log format, defaulting to json', env='POLYRESULT_LOG_FORMAT', value=fmt)
    return True


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    capture: tuple[type[BaseException], ...] | None = None,
) -> Config:
    """Initialize polyresult with the given configuration.

    Unspecified settings are read from the environment
    (``POLYRESULT_LOG_LEVEL``, ``POLYRESULT_LOG_FORMAT``) or take defaults.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = from environment.
        json_logs: JSON or console log output. None = from environment.
        capture: Default exception types for the capture functions.

    Returns:
        The Config that was set.

    Example:
        ```python
        import polyresult

        polyresult.init(log_level='DEBUG', json_logs=False)
        polyresult.init(capture=(ValueError, KeyError))
        ```
    """
    global _config  # noqa: PLW0603

    resolved_capture = tuple(capture) if capture is not None else _DEFAULT.capture
    if not resolved_capture:
        msg = 'capture must name at least one exception type'
        raise ValueError(msg)

    _config = Config(
        log_level=log_level if log_level is not None else _detect_log_level(),
        json_logs=json_logs if json_logs is not None else _detect_json_logs(),
        capture=resolved_capture,
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    _log.info(
        'polyresult configured',
        log_level=_config.log_level,
        json_logs=_config.json_logs,
        capture=[exc.__name__ for exc in _config.capture],
    )
    return _config


def get_config() -> Config:
    """Get the current configuration.

    Returns:
        The Config set by init(), or the defaults if init() was never called.
    """
    if _config is None:
        return _DEFAULT
    return _config


def _reset() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
