"""Console logging adapter built on structlog.

Writes one structured line per call to stdout:
    - development: colored console renderer
    - testing/ci/production: JSON renderer for log shipping

Every line carries the ISO UTC timestamp, level, and the application name
and version bound at construction.

Implementation does NOT inherit from LoggerProtocol (PEP 544 structural
subtyping).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


class ConsoleAdapter:
    """Structured stdout logger.

    Args:
        use_json: Render JSON lines instead of the console renderer.
        level: Minimum level name ("DEBUG", "INFO", ...).
        app_name: Bound as `app` on every line.
        app_version: Bound as `version` on every line.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        app_name: str | None = None,
        app_version: str | None = None,
    ) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
        processors.append(
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
        )

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=False,
        )

        initial = {
            key: value
            for key, value in (("app", app_name), ("version", app_version))
            if value
        }
        self._logger = structlog.get_logger().bind(**initial)

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.error(message, **_with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """New adapter sharing the configuration, with extra bound context."""
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter

    def with_context(self, **context: Any) -> ConsoleAdapter:
        return self.bind(**context)


def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is None:
        return context
    enriched = dict(context)
    enriched["error_type"] = type(error).__name__
    enriched["error_message"] = str(error)
    error_code = getattr(error, "code", None)
    if error_code is not None:
        enriched["error_code"] = getattr(error_code, "value", str(error_code))
    return enriched
