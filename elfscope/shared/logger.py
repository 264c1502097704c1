"""
elfscope Structured Logger
===========================

Provides :class:`ScopeLogger`, a logging facade that writes human-friendly
Rich console output and, optionally, plain-text or JSON-lines records to a
rotating log file.

Every record carries the component name the logger is bound to and the
decode phase active when the record was emitted, so a failed load can be
traced back to the pipeline stage that produced it.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object.

    Output fields::

        {
          "timestamp": "...",
          "level": "DEBUG",
          "logger": "elfscope.loader",
          "message": "...",
          "component": "loader",
          "phase": "decode_header",
          "extra": { ... },
          "exc_info": "..."
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("component", "phase"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "scope_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ========================== Rich Console Handler ===========================


class _ColorConsoleHandler(RichHandler):
    """:class:`rich.logging.RichHandler` writing to stderr with the
    elfscope log theme."""

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


# ========================== ScopeLogger ====================================


class ScopeLogger:
    """Context-aware logger for elfscope components.

    Each instance is bound to a *component* name (e.g. ``"loader"``) and
    can carry the current decode *phase* via :meth:`phase`.

    Usage::

        log = ScopeLogger("loader", log_file="elfscope.log", json_logs=True)
        with log.phase("decode_header"):
            log.debug("class=%d data=%d", elf_class, endianness)
        log.info("Loaded %s", path)

    Args:
        component:       Name of the elfscope component using the logger.
        log_level:       Minimum severity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file:        Path to the rotating log file. ``None`` disables file logging.
        json_logs:       If ``True`` the file handler emits JSON lines.
        max_bytes:       Maximum log-file size before rotation (default 10 MiB).
        backup_count:    Number of rotated backup files to keep.
        console_output:  If ``True`` attach a Rich console handler.
        configure:       If ``False`` bind to the named logger as it is, leaving
                         its level and handlers untouched.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
        configure: bool = True,
    ) -> None:
        self._component = component
        self._phase: str | None = None

        self._logger = logging.getLogger(f"elfscope.{component}")
        if not configure:
            return

        level = getattr(logging, log_level.upper(), logging.INFO)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Re-instantiation must not stack handlers or leak open files
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_output:
            self._logger.addHandler(_ColorConsoleHandler(level=level))

        if log_file is not None:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt=(
                            "%(asctime)s | %(levelname)-8s | "
                            "%(name)s | %(phase)s | %(message)s"
                        ),
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    @classmethod
    def quiet(cls, component: str) -> ScopeLogger:
        """Return a logger bound to ``elfscope.<component>`` as it stands.

        Used when the library is driven programmatically.  Handlers and
        level set up earlier, by the caller or another instance, are kept.
        """
        return cls(component, configure=False)

    # ------------------------------------------------------------------ #
    #  Phase scope
    # ------------------------------------------------------------------ #

    class _PhaseContext:
        """Context manager that temporarily binds a phase name."""

        def __init__(self, parent: ScopeLogger, phase: str) -> None:
            self._parent = parent
            self._phase = phase
            self._prev: str | None = None

        def __enter__(self) -> ScopeLogger:
            self._prev = self._parent._phase
            self._parent._phase = self._phase
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._phase = self._prev

    def phase(self, name: str) -> _PhaseContext:
        """Return a context manager that sets the *phase* field.

        While active, every log record includes ``phase=<name>``.
        """
        return self._PhaseContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Move non-standard keyword arguments into the record's *extra*."""
        extra = kwargs.pop("extra", {}) or {}

        scope_extra: dict[str, Any] = {}
        standard_keys = {"exc_info", "stack_info", "stacklevel"}
        for key in list(kwargs):
            if key not in standard_keys:
                scope_extra[key] = kwargs.pop(key)

        extra["component"] = self._component
        extra["phase"] = self._phase
        if scope_extra:
            extra["scope_extra"] = scope_extra

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.error(msg, *args, **kwargs)

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Context manager for measuring and logging elapsed time."""

        def __init__(self, logger_inst: ScopeLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0

        def __enter__(self) -> ScopeLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            if exc and exc[0] is not None:
                return
            self._logger.info(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            """Seconds elapsed since entering the context."""
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager that logs start, finish and elapsed time.

        Nothing is logged on exit when the block raised.
        """
        return self._TimingContext(self, label)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def component(self) -> str:
        return self._component

    @property
    def current_phase(self) -> str | None:
        return self._phase

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
