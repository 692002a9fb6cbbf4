"""
Data ingestion modules for the flood risk engine
"""

from .precipitation_connector import PrecipitationConnector, MonitoredLocation, DEFAULT_LOCATIONS

__all__ = [
    'PrecipitationConnector',
    'MonitoredLocation',
    'DEFAULT_LOCATIONS'
]
