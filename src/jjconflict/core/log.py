"""Logger with composable output sinks, backed by logfire."""

from __future__ import annotations

import contextlib
import sys
from abc import abstractmethod
from pathlib import Path
from typing import Any

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from pydantic import Field, PrivateAttr, model_validator

from jjconflict.core.base import BaseConfig

_current_logger: Logger | None = None


class _LoggerProxy:
    """Proxy that forwards attribute access to _current_logger.

    Before setup_logger() has run, every method is a no-op, so the
    parser and projector can log unconditionally when used as a
    library.
    """
    def __getattr__(self, name):
        if _current_logger is None:
            def _noop(*args, **kwargs):  # noqa: ARG001
                pass
            return _noop
        return getattr(_current_logger, name)

    def __enter__(self):
        if _current_logger is None:
            return self
        return _current_logger.__enter__()

    def __exit__(self, *args):
        if _current_logger is None:
            return False
        return _current_logger.__exit__(*args)


# Module-level logger - this is what gets imported everywhere
logger = _LoggerProxy()


class LevelFilteringExporter(SpanExporter):
    """Span exporter that drops spans below a minimum level."""

    # Level names mapped to OpenTelemetry severity numbers
    _level_thresholds = {
        'spew': logs_pb2.SEVERITY_NUMBER_TRACE,    # 1 - most verbose
        'trace': logs_pb2.SEVERITY_NUMBER_TRACE3,  # 3
        'debug': logs_pb2.SEVERITY_NUMBER_DEBUG,   # 5
        'info': logs_pb2.SEVERITY_NUMBER_INFO,     # 9
        'warn': logs_pb2.SEVERITY_NUMBER_WARN,     # 13
        'error': logs_pb2.SEVERITY_NUMBER_ERROR,   # 17
        'fatal': logs_pb2.SEVERITY_NUMBER_FATAL,   # 21
    }

    def __init__(self, exporter: SpanExporter, min_level: str | None):
        """Initialize filtering exporter.

        Args:
            exporter: The underlying exporter to forward spans to
            min_level: Minimum level (spew, trace, debug, info, etc.)
        """
        self._exporter = exporter
        self._min_severity = self._level_thresholds.get(
            (min_level or 'info').lower(), logs_pb2.SEVERITY_NUMBER_INFO
        )

    def export(self, spans: list[ReadableSpan]) -> SpanExportResult:
        """Export spans whose severity is at or above the threshold."""
        filtered = []
        for span in spans:
            attrs = span.attributes or {}
            level_num = attrs.get(
                'logfire.level_num', logs_pb2.SEVERITY_NUMBER_INFO
            )
            if level_num >= self._min_severity:
                filtered.append(span)

        if filtered:
            return self._exporter.export(filtered)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class Sink(BaseConfig):
    """Base class for log output sinks."""

    enabled: bool = Field(default=True, description="Enable this sink")
    level: str | None = Field(
        default=None,
        description=(
            "Log level for this sink. If None, inherits from Logger.level. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    escape_special_characters: bool = Field(
        default=False,
        description="Escape newlines/tabs in output"
    )
    format_template: str | None = Field(
        default=None,
        description="Format template string (None for JSON spans)"
    )

    _processor: Any = PrivateAttr(default=None)

    @staticmethod
    def _escape_special_chars(text: str) -> str:
        return (text
            .replace('\\', '\\\\')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
        )

    @staticmethod
    def _extract_span_data(span) -> dict:
        """Extract template fields from a span."""
        from datetime import UTC, datetime

        attrs = span.attributes or {}
        ts = datetime.fromtimestamp(span.start_time / 1e9, tz=UTC)
        filepath = attrs.get("code.filepath", "")
        lineno = attrs.get("code.lineno", "")

        level_num = attrs.get(
            "logfire.level_num", logs_pb2.SEVERITY_NUMBER_INFO
        )
        level_name = "unknown"
        for name in [
            'fatal', 'error', 'warn', 'info', 'debug', 'trace', 'spew'
        ]:
            threshold = LevelFilteringExporter._level_thresholds[name]
            if level_num >= threshold:
                level_name = name
                break

        return {
            'timestamp': ts,
            'level': level_name,
            'message': attrs.get("logfire.msg", span.name),
            'filepath': filepath,
            'lineno': lineno,
            'location': f"{filepath}:{lineno}" if filepath else "",
            'function': attrs.get("code.function", ""),
        }

    def _format_span(self, span) -> str:
        """Format a span with format_template, or as JSON."""
        if not self.format_template:
            import os
            return span.to_json() + os.linesep

        data = self._extract_span_data(span)
        if self.escape_special_characters:
            data['message'] = self._escape_special_chars(data['message'])

        try:
            formatted = self.format_template.format(**data)
        except KeyError as e:
            return f"ERROR: Invalid template field {e}\n"

        # Append user-provided attributes, skipping instrumentation
        # internals
        attrs = span.attributes or {}
        skip_prefixes = ('otel.', 'telemetry.', 'service.', 'process.')
        skip_keys = {
            'code.filepath', 'code.lineno', 'code.function',
            'logfire.msg', 'logfire.level_num', 'logfire.span_type',
            'logfire.msg_template', 'logfire.json_schema',
        }
        custom_attrs = {
            key: value
            for key, value in attrs.items()
            if key not in skip_keys
            and not any(key.startswith(p) for p in skip_prefixes)
        }
        if custom_attrs:
            attrs_str = ' '.join(
                f"{k}={repr(v)}" for k, v in sorted(custom_attrs.items())
            )
            formatted = f"{formatted} │ {attrs_str}"

        return formatted + '\n'

    @abstractmethod
    def create_processor(self, log_root: Path, session_name: str):
        """Create an OpenTelemetry span processor for this sink.

        Returns:
            SpanProcessor instance or None if not applicable
        """
        pass

    def close(self):
        """Shut down the processor, if any."""
        if self._processor:
            with contextlib.suppress(Exception):
                self._processor.shutdown()


class ConsoleSink(Sink):
    """Console output sink."""

    verbose: bool = Field(
        default=False,
        description="Show full span details"
    )
    colors: str = Field(
        default="auto",
        description="Color mode: auto, always, never"
    )

    def create_processor(self, log_root: Path, session_name: str):
        """Console is configured via logfire.configure()."""
        return None


class FileSink(Sink):
    """File output sink."""

    enabled: bool = Field(
        default=False,
        description="Enable file logging"
    )
    path: str = Field(
        default="{log_root}/{session_name}/jjconflict.log",
        description="Log file path template"
    )

    _file: Any = PrivateAttr(default=None)

    def create_processor(self, log_root: Path, session_name: str):
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        log_path = Path(
            self.path.format(log_root=log_root, session_name=session_name)
        )
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Line buffered so a crash keeps everything written so far
        self._file = open(log_path, "a", buffering=1, encoding="utf-8")  # noqa: SIM115

        base_exporter = ConsoleSpanExporter(
            out=self._file,
            formatter=self._format_span
        )
        filtered_exporter = LevelFilteringExporter(base_exporter, self.level)
        return BatchSpanProcessor(filtered_exporter)

    def close(self):
        """Close processor first, then the file.

        The processor flushes remaining spans into the file on
        shutdown.
        """
        super().close()

        if self._file and not self._file.closed:
            with contextlib.suppress(OSError):
                self._file.flush()
                self._file.close()


class Logger(BaseConfig):
    """Logger with composable output sinks.

    Closing the logger closes every sink through the BaseCloseable
    cascade.
    """

    level: str = Field(
        default="info",
        description=(
            "Default log level for all sinks. Individual sinks can override. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    console: ConsoleSink = Field(
        default_factory=ConsoleSink,
        description="Console output configuration"
    )
    file: FileSink = Field(
        default_factory=FileSink,
        description="File logging configuration"
    )

    @model_validator(mode='after')
    def _cascade_level_to_sinks(self) -> 'Logger':
        """Give sinks without their own level the default level."""
        for sink in [self.console, self.file]:
            if sink.level is None:
                sink.level = self.level
        return self

    def setup(self, log_root: Path, session_name: str):
        """Initialize all enabled sinks and configure logfire.

        Args:
            log_root: Root directory for log files
            session_name: Name used for the log subdirectory and the
                service name
        """
        for sink in [self.console, self.file]:
            if sink.enabled:
                sink._processor = sink.create_processor(
                    log_root, session_name
                )

        processors = [
            sink._processor
            for sink in [self.file]
            if sink.enabled and sink._processor
        ]

        import logfire
        from logfire import ConsoleOptions

        console_config = (
            ConsoleOptions(
                min_log_level=self.console.level,
                verbose=self.console.verbose,
                colors=self.console.colors,
                include_timestamps=True,
                output=sys.stderr,
            )
            if self.console.enabled
            else False
        )

        logfire.configure(
            service_name=f"jjconflict-{session_name}",
            send_to_logfire=False,
            console=console_config,
            additional_span_processors=processors if processors else None,
        )

    # Logging methods - delegate to logfire

    def info(self, msg: str, **kwargs):
        import logfire
        logfire.info(msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        import logfire
        logfire.debug(msg, **kwargs)

    def trace(self, msg: str, **kwargs):
        import logfire
        logfire.log(
            level=LevelFilteringExporter._level_thresholds['trace'],
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def spew(self, msg: str, **kwargs):
        """Log below trace, for per-marker scanner mechanics."""
        import logfire
        logfire.log(
            level=LevelFilteringExporter._level_thresholds['spew'],
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def warn(self, msg: str, **kwargs):
        import logfire
        logfire.warn(msg, **kwargs)

    def error(self, msg: str, **kwargs):
        import logfire
        logfire.error(msg, **kwargs)

    def span(self, msg: str, **kwargs):
        """Create a span context manager for tracing operations.

        Usage:
            with logger.span("operation_name"):
                # work here
        """
        import logfire
        return logfire.span(msg, **kwargs)

    def __getattr__(self, name):
        """Forward any other logfire methods."""
        import logfire
        return getattr(logfire, name)


def setup_logger(
    log_root: Path,
    session_name: str,
    console: ConsoleSink | None = None,
    file: FileSink | None = None,
    level: str = "info",
) -> Logger:
    """Initialize the global logger singleton.

    Called by Config once settings are loaded. Can also be called
    directly for tests or library use.

    Args:
        log_root: Root directory for log files
        session_name: Name of the current session
        console: Console sink config (or None for defaults)
        file: File sink config (or None for defaults)
        level: Default level for sinks that set none

    Returns:
        Logger: The initialized global logger instance
    """
    global _current_logger

    _current_logger = Logger(
        level=level,
        console=console or ConsoleSink(),
        file=file or FileSink(),
    )
    _current_logger.setup(log_root, session_name)

    return _current_logger
