"""
Middleware package.
"""
from sellgpt.middleware.error_handler import ErrorHandlerMiddleware, sellgpt_error_handler
from sellgpt.middleware.request_id import RequestIdMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestIdMiddleware",
    "sellgpt_error_handler",
]
