"""
Utility functions and helpers for gsvalidate.
"""

from .memory import secure_zero

__all__ = [
    'secure_zero',
]
