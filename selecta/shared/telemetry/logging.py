"""Process-wide logging setup.

Modules log through logging.getLogger(__name__); this only configures
the root handler once at startup. Every line carries the ID of the
request it was logged under ("-" outside a request).
"""

import logging
import sys

from selecta.core.config import Settings, get_settings
from selecta.middleware.request_id import current_request_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# selecta.access replaces uvicorn's own per-request line.
_QUIET_LOGGERS = ("uvicorn.access", "multipart", "python_multipart")


class RequestIDFilter(logging.Filter):
    """Stamp record.request_id from the current request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id() or "-"
        return True


def setup_logging(settings: Settings | None = None) -> None:
    """Configure stdout logging; DEBUG level when settings.debug is set, else INFO.

    SQL statement logging follows DATABASE_ECHO and is left to SQLAlchemy's
    own engine logger.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("selecta.access").setLevel(level)
