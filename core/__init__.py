"""
Core utilities module - Shared application helpers
"""

from .logging_utils import ActionRecorder

__all__ = [
    'ActionRecorder',
]
