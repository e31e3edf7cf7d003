"""
Calibration package for nominal/calibrated error maps and correction lookups.
"""

from .calibration_table import (
    CalibrationTable,
    CalibrationError,
    InvalidArgumentError,
    EmptyTableError,
    OutOfRangeError,
)

__all__ = [
    'CalibrationTable',
    'CalibrationError',
    'InvalidArgumentError',
    'EmptyTableError',
    'OutOfRangeError'
]
