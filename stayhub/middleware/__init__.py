"""
Middleware package for the StayHub API.
"""

from .request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
