"""
Utility modules for the flood risk engine
"""

from .logger import get_logger, setup_logging
from .rounding import clamp, round_half_away

__all__ = [
    'get_logger',
    'setup_logging',
    'clamp',
    'round_half_away'
]
