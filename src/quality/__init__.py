"""
Data Quality Module for the flood risk engine

Validators run batch checks on precipitation feed data before it is
displayed.
"""

from src.quality.validators import (
    PrecipitationDataValidator,
    ValidationResult,
    ValidationSeverity
)

__all__ = [
    'PrecipitationDataValidator',
    'ValidationResult',
    'ValidationSeverity'
]
