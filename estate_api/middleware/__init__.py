"""
Middleware package for the Estate Listing API.
"""

from .validation import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
