"""HTTP middleware: request ID, access log.

Applied in main app; order matters (last added = outermost).
Import and use from selecta.main.
"""

from selecta.middleware.access_log import AccessLogMiddleware
from selecta.middleware.request_id import RequestIDMiddleware, current_request_id

__all__ = [
    "AccessLogMiddleware",
    "RequestIDMiddleware",
    "current_request_id",
]
