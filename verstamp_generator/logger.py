"""
Run logging for VerStamp.

Build logs get short ``[LEVEL] message`` lines on stderr, so stdout stays free
for ``--dry-run`` output. CI can additionally ask for a rotating JSON-lines
file where every record carries the run id and any structured fields passed
to the logging call.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "verstamp_generator"

JSON_MAX_BYTES = 5 * 1024 * 1024
JSON_BACKUPS = 5


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the run id"""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "run_id": self.run_id,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(getattr(record, "fields", {}))
        return json.dumps(payload, ensure_ascii=False, default=str)


def new_run_id() -> str:
    """``20261017T120000Z-1a2b3c4d``: UTC start time plus a random suffix."""
    started = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{started}-{uuid.uuid4().hex[:8]}"


class ProductionLogger:
    """
    Logger for one generation run.

    Owns the handlers of the ``verstamp_generator`` logger for as long as it
    lives; module loggers (``verstamp_generator.vcs`` and friends) propagate
    into them. Creating a new instance replaces the previous run's handlers.

    Keyword arguments to ``info``/``warning``/... become fields of the JSON
    record and are not shown on the console.
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        log_level: str = "INFO",
        json_file: Optional[Path] = None,
        console: bool = True,
    ):
        self.run_id = run_id or new_run_id()
        self.log_level = logging.getLevelName(log_level.upper())
        self.json_file = Path(json_file) if json_file else None
        self.console = console
        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._install_handlers()

    def _install_handlers(self) -> None:
        self.close()
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False

        if self.json_file:
            self.json_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                self.json_file, maxBytes=JSON_MAX_BYTES, backupCount=JSON_BACKUPS, encoding="utf-8"
            )
            handler.setFormatter(JSONFormatter(self.run_id))
            self.logger.addHandler(handler)

        if self.console:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(handler)

        # Keep quiet runs quiet instead of falling back to logging.lastResort
        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def log_event(self, level: str, message: str, **fields: Any) -> None:
        """Log ``message`` at ``level`` with structured ``fields``."""
        self.logger.log(
            logging.getLevelName(level.upper()), message, extra={"fields": fields}, stacklevel=3
        )

    def debug(self, message: str, **fields: Any) -> None:
        self.log_event("DEBUG", message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log_event("INFO", message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log_event("WARNING", message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log_event("ERROR", message, **fields)

    def get_run_id(self) -> str:
        return self.run_id

    def close(self) -> None:
        """Detach and close every handler on the package logger."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()


def get_logger(
    run_id: Optional[str] = None,
    log_level: str = "INFO",
    json_file: Optional[Path] = None,
    console: bool = True,
) -> ProductionLogger:
    """Configure logging for a new run and return its logger."""
    return ProductionLogger(run_id=run_id, log_level=log_level, json_file=json_file, console=console)
