"""
Logging setup for the prescription backend.

Modules log through ``logging.getLogger(__name__)`` and attach structured
fields with ``extra={"context": {...}}``. setup_logging() installs:

- a console handler (colored text, or JSON lines when LOG_JSON is set)
- rotating JSON files ``app.log`` and ``pms_errors.log`` (ERROR and above)
- per-request start/finish records tagged with a request id
- optional SQL statement timing with a slow-query warning
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from flask import Flask, g, has_request_context, request
from sqlalchemy import event
from sqlalchemy.engine import Engine

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5
SLOW_QUERY_MS = 500.0
REQUEST_ID_HEADER = "X-Request-ID"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _current_request_id() -> Optional[str]:
    if has_request_context():
        return g.get("request_id")
    return None


class JSONFormatter(logging.Formatter):
    """One JSON object per line; the ``context`` extra is nested as-is."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        request_id = _current_request_id()
        if request_id:
            payload["request_id"] = request_id
        context = getattr(record, "context", None)
        if context is not None:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored level names, with context fields appended as key=value."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy: other handlers format the same record
        shown = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname, "")
        shown.levelname = f"{color}{record.levelname:8}{self.RESET}"
        text = super().format(shown)
        context = getattr(record, "context", None)
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            text = f"{text} [{fields}]"
        return text


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int, use_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    return handler


def _file_handlers(log_dir: Path, level: int) -> Tuple[List[logging.Handler], List[str]]:
    """Build the rotating JSON file handlers; problems come back as messages."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return [], [f"Cannot create log directory {log_dir}: {e}; logging to console only"]

    handlers: List[logging.Handler] = []
    problems: List[str] = []
    for filename, handler_level in (("app.log", level), ("pms_errors.log", logging.ERROR)):
        try:
            handler = logging.handlers.RotatingFileHandler(
                log_dir / filename,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        except OSError as e:
            problems.append(f"Cannot open {filename}: {e}; skipping it")
            continue
        handler.setLevel(handler_level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers, problems


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = True,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the root logger. Safe to call more than once; handlers from a
    previous call are closed and replaced.

    Args:
        app: When given, request start/finish logging is registered on it
        log_level: Level name or number
        enable_sql_echo: Time every SQL statement on the "pms.sql" logger
        log_to_file: Add the rotating JSON file handlers
        use_json_format: JSON lines on the console instead of colored text
        log_dir: Directory for the log files
    """
    level = _resolve_level(log_level)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_console_handler(level, use_json_format))

    problems: List[str] = []
    if log_to_file:
        target = Path(log_dir) if log_dir else Path(__file__).resolve().parents[2] / "logs"
        file_handlers, problems = _file_handlers(target, level)
        for handler in file_handlers:
            root.addHandler(handler)
    for problem in problems:
        root.warning(problem, extra={"context": {"component": "logging_setup"}})

    if enable_sql_echo:
        _register_sql_timing()
    if app is not None:
        _register_request_logging(app)

    for noisy in ("werkzeug", "urllib3", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("pms").debug(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "sql_echo": enable_sql_echo,
                "log_to_file": log_to_file and not problems,
                "json": use_json_format,
            }
        },
    )


_sql_timing_registered = False


def _register_sql_timing() -> None:
    global _sql_timing_registered
    if _sql_timing_registered:
        return
    _sql_timing_registered = True

    @event.listens_for(Engine, "before_cursor_execute")
    def _start_timer(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("pms_query_start", []).append(time.perf_counter())

    @event.listens_for(Engine, "after_cursor_execute")
    def _stop_timer(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["pms_query_start"].pop()
        log_sql_query(statement, parameters, (time.perf_counter() - started) * 1000, cursor.rowcount)


def log_sql_query(query: str, params: Any, duration_ms: float, row_count: int = 0) -> None:
    """Record one executed statement; slow ones are logged as warnings."""
    level = logging.WARNING if duration_ms >= SLOW_QUERY_MS else logging.INFO
    logging.getLogger("pms.sql").log(
        level,
        f"SQL {'slow query' if level == logging.WARNING else 'query'} "
        f"({duration_ms:.1f} ms)",
        extra={
            "context": {
                "statement": query[:500],
                "params": str(params)[:500],
                "duration_ms": round(duration_ms, 2),
                "rows": row_count,
            }
        },
    )


def _register_request_logging(app: Flask) -> None:
    request_logger = logging.getLogger("pms.request")

    @app.before_request
    def _start_request():
        g.request_started = time.perf_counter()
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
        request_logger.debug(
            f"--> {request.method} {request.path}",
            extra={"context": {"remote_addr": request.remote_addr}},
        )

    @app.after_request
    def _finish_request(response):
        started = g.get("request_started")
        if started is not None:
            elapsed_ms = (time.perf_counter() - started) * 1000
            request_logger.info(
                f"<-- {request.method} {request.path} {response.status_code}",
                extra={
                    "context": {
                        "status_code": response.status_code,
                        "duration_ms": round(elapsed_ms, 2),
                    }
                },
            )
        if g.get("request_id"):
            response.headers[REQUEST_ID_HEADER] = g.request_id
        return response
