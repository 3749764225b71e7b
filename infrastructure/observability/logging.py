"""
Logging setup with contextvars-based metadata injection.

- Adds subscription id, source kind and request tag into every log line (via contextvars).
- Supports console-only logging OR console + rotating file logs.
- Tunes noisy third-party library loggers (httpx, uvicorn, etc.).
"""

import contextvars
import hashlib
import logging
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Context variables for dynamic log metadata
cv_subscription = contextvars.ContextVar("subscription", default="-")
cv_source = contextvars.ContextVar("source", default="-")
cv_request_tag = contextvars.ContextVar("request_tag", default="-")


def make_request_tag(request_id: str | None = None, length: int = 8) -> str:
    """
    Short tag for correlating the log lines of one report request.
    Derived from `request_id` when given (stable), otherwise from a fresh uuid4.
    Uses BLAKE2s for collision resistance.
    """
    seed = request_id if request_id is not None else uuid.uuid4().hex
    h = hashlib.blake2s(seed.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Inject context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.sub = cv_subscription.get() or "-"
        record.src = cv_source.get() or "-"
        record.req = cv_request_tag.get() or "-"
        return True


def set_log_context(
    *,
    subscription_id: str | None = None,
    source: str | None = None,
    request_tag: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if subscription_id is not None:
        cv_subscription.set(str(subscription_id))
    if source is not None:
        cv_source.set(str(source))
    if request_tag is not None:
        cv_request_tag.set(str(request_tag))


def clear_request_context() -> None:
    """Reset request context to default (keep stream info)."""
    cv_request_tag.set("-")


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application logging with contextvars support.

    Args:
        log_file: Path to log file (None = console only)
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
    """
    # Clear existing handlers to avoid duplicate logs if called multiple times
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # keep root permissive; handlers enforce levels

    # Formatter includes context fields injected by ContextInjectFilter
    console_fmt = "%(asctime)s [%(levelname)s] sub=%(sub)s src=%(src)s req=%(req)s | %(message)s"
    file_fmt = "%(asctime)s [%(levelname)s] %(name)s %(threadName)s | sub=%(sub)s src=%(src)s req=%(req)s | %(message)s"

    console_formatter = logging.Formatter(console_fmt, datefmt="%H:%M:%S")
    file_formatter = logging.Formatter(file_fmt, datefmt="%Y-%m-%d %H:%M:%S")

    ctx_filter = ContextInjectFilter()

    # Console handler (human-readable, INFO+)
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(console_formatter)
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    # File handler (detailed, DEBUG+, with rotation)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(file_formatter)
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    # Third-party library log levels
    # Reduce noise from HTTP libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # One line per report request is noise; errors still come through uvicorn.error
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
