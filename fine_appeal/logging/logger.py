import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

_FORMAT = "%(asctime)s [%(levelname)s] (%(app_env)s) %(message)s"


class _AppEnvFilter(logging.Filter):
    def __init__(self, app_env: str) -> None:
        super().__init__()
        self._app_env = app_env

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "app_env"):
            record.app_env = self._app_env
        return True


class Log:
    """Process-wide logger for the appeal pipeline."""

    _logger: logging.Logger = logging.getLogger("fine_appeal")

    @classmethod
    def configure(cls, log_level: str, app_env: str = "dev") -> None:
        """Attach a stdout handler tagged with the deployment environment."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(_FORMAT))
            handler.addFilter(_AppEnvFilter(app_env))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    @contextmanager
    def stage(cls, name: str) -> Iterator[None]:
        """Log how long a pipeline stage took, and whether it failed.

        The exception is re-raised unchanged.
        """
        started = time.perf_counter()
        try:
            yield
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            cls.warning(f"{name} failed after {elapsed_ms:.0f} ms: {type(exc).__name__}: {exc}")
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        cls.info(f"{name} finished in {elapsed_ms:.0f} ms")
