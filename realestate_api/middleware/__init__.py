"""
HTTP middleware for the Real Estate Listings API.
"""

from realestate_api.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
