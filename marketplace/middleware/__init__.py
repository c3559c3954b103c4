"""HTTP middleware: request ID and request timeout.

Applied in create_app(); order matters (last added = outermost).
"""

from marketplace.middleware.request_id import RequestIDMiddleware, request_id_var
from marketplace.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware", "request_id_var"]
