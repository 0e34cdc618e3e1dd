from __future__ import annotations

import logging
import logging.handlers
import os
import re
from pathlib import Path

LOG_FILE = "edp.log"

# signature=<hex> in signed query strings, and signing/API-key headers in dumped requests
_SECRET_PATTERNS = (
    re.compile(r"(signature=)[0-9a-fA-F]+"),
    re.compile(r"""(['"]?(?:api-signature|api-key|X-MBX-APIKEY)['"]?\s*[:=]\s*['"]?)[^'",\s}]+""", re.IGNORECASE),
)


def redact(text: str) -> str:
    """Mask request signatures and API keys in ``text``."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrites each record so signatures and API keys never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(log_dir: Path | None = None) -> None:
    """Console logging plus, when ``log_dir`` is given, a rotating ``edp.log``.

    The level comes from ``EDP_LOG_LEVEL`` (default INFO). Every handler
    carries a :class:`RedactingFilter`; transport libraries log full signed
    URLs at DEBUG, so urllib3 is never allowed below INFO.
    """
    level_name = os.environ.get("EDP_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    redacting = RedactingFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        # 10MB per file, 5 backups
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_dir / LOG_FILE,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(redacting)
        root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
