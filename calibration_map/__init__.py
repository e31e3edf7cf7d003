"""
Calibration Map

Interpolated error correction from a sparse set of nominal/calibrated value
pairs. A CalibrationTable stores nominal -> error points and answers error
and corrected position queries between them.
"""

__version__ = "0.1.0"
__author__ = "Calibration Map Project"

# Core imports
from .calibration.calibration_table import (
    CalibrationTable,
    CalibrationError,
    InvalidArgumentError,
    EmptyTableError,
    OutOfRangeError,
)

# Configuration and utilities
from .config.settings import Settings
from .utils.logging_config import setup_logging

__all__ = [
    'CalibrationTable',
    'CalibrationError',
    'InvalidArgumentError',
    'EmptyTableError',
    'OutOfRangeError',
    'Settings',
    'setup_logging'
]
