"""
Services that hold caller-owned state around the stateless engine
"""

from .precipitation_feed import PrecipitationFeed, PrecipitationSnapshot

__all__ = [
    'PrecipitationFeed',
    'PrecipitationSnapshot'
]
