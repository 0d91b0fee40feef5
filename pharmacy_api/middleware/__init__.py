"""
Middleware components for the pharmacy reference API.
"""

from .timeout import TimeoutMiddleware

__all__ = [
    "TimeoutMiddleware",
]
