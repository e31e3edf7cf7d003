"""
Calibration Table for Nominal/Calibrated Value Correction

Holds a sparse set of nominal -> error points (error = nominal - calibrated)
and answers interpolated error and corrected position queries between them.
"""

import bisect
import logging
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np


SUMMARY_HEADER = "Nominal\tCalibrated\tError\tCorrected\n"


class CalibrationError(Exception):
    """Base class for calibration table errors."""


class InvalidArgumentError(CalibrationError, ValueError):
    """Raised when batch input sequences do not line up."""


class EmptyTableError(CalibrationError, RuntimeError):
    """Raised when a query is made against an empty table."""

    def __init__(self, message: str = "Calibration map is empty."):
        super().__init__(message)


class OutOfRangeError(CalibrationError, ValueError):
    """Raised when a nominal value has no bracketing pair of stored keys."""

    def __init__(self, nominal: float, minimum: float, maximum: float):
        super().__init__(
            f"Nominal value {nominal} outside of calibrated range [{minimum}, {maximum}]."
        )
        self.nominal = nominal
        self.minimum = minimum
        self.maximum = maximum


class CalibrationTable:
    """
    Error map from nominal values to signed correction offsets.

    Points are stored as nominal -> (nominal - calibrated). Queries return the
    stored error on an exact key match and otherwise interpolate linearly
    between the two neighbouring keys. Nothing is extrapolated: a nominal value
    outside the stored keys, or on the boundary without matching it exactly,
    is rejected with OutOfRangeError.

    Not thread safe; guard shared instances externally.
    """

    def __init__(self, name: str = "calibration"):
        """
        Initialize an empty calibration table.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self.logger = logging.getLogger(__name__)

        # Exact lookup plus ascending keys for neighbour search
        self._errors: Dict[float, float] = {}
        self._keys: List[float] = []

    def __repr__(self) -> str:
        return f"CalibrationTable(name={self.name!r}, points={len(self._keys)})"

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, nominal) -> bool:
        return nominal in self._errors

    def is_empty(self) -> bool:
        """Check if the table holds no points."""
        return not self._keys

    def add_point(self, nominal: float, calibrated: float):
        """
        Add a value set to the error map.

        An existing entry for the same nominal value is overwritten.

        Args:
            nominal: The nominal value
            calibrated: The corresponding calibrated value
        """
        nominal = float(nominal)
        error = nominal - float(calibrated)
        self._store(nominal, error)
        self.logger.debug(f"{self.name}: point {nominal} -> error {error}")

    def add_points(self, nominals: Sequence[float], calibrateds: Sequence[float]):
        """
        Add a range of points to the error map.

        Args:
            nominals: Nominal values
            calibrateds: Calibrated values, positionally matching nominals

        Raises:
            InvalidArgumentError: If the two sequences differ in length
        """
        if len(nominals) != len(calibrateds):
            raise InvalidArgumentError(
                f"Nominals and calibrated values must have the same size "
                f"({len(nominals)} != {len(calibrateds)})."
            )

        for nominal, calibrated in zip(nominals, calibrateds):
            self.add_point(nominal, calibrated)

        self.logger.debug(f"{self.name}: added {len(nominals)} points")

    def set_map(self, entries: Mapping[float, float]):
        """
        Replace the error map with the given nominal -> error mapping.

        Values are taken as already computed errors, not calibrated values.
        """
        self._errors = {float(key): float(error) for key, error in entries.items()}
        self._keys = sorted(self._errors)
        self.logger.debug(f"{self.name}: map replaced with {len(self._keys)} points")

    def append_map(self, entries: Mapping[float, float]):
        """
        Merge the given nominal -> error mapping into the error map.

        Keys already present keep their current error; only new keys are
        inserted. This differs from add_point, which always overwrites.
        """
        inserted = 0
        for key, error in entries.items():
            key = float(key)
            if key not in self._errors:
                self._store(key, float(error))
                inserted += 1

        self.logger.debug(
            f"{self.name}: appended {inserted} of {len(entries)} points"
        )

    def error_value(self, nominal: float) -> float:
        """
        Get the error value for a nominal value.

        Args:
            nominal: The nominal value

        Returns:
            float: Stored error on an exact match, otherwise the linear
            interpolation between the neighbouring points

        Raises:
            EmptyTableError: If the table holds no points
            OutOfRangeError: If nominal is not strictly between two stored keys
        """
        nominal = float(nominal)
        if not self._keys:
            raise EmptyTableError()

        exact = self._errors.get(nominal)
        if exact is not None:
            return exact

        index = bisect.bisect_right(self._keys, nominal)
        if index == 0 or index == len(self._keys):
            raise OutOfRangeError(nominal, self._keys[0], self._keys[-1])

        lower = self._keys[index - 1]
        upper = self._keys[index]
        return self._interpolate(
            nominal, lower, self._errors[lower], upper, self._errors[upper]
        )

    def corrected_position(self, nominal: float) -> float:
        """
        Get the corrected position for a nominal value.

        Raises the same errors as error_value.
        """
        nominal = float(nominal)
        return nominal - self.error_value(nominal)

    def error_values(self, nominals: Sequence[float]) -> np.ndarray:
        """Apply error_value to each nominal value; the first failure is raised."""
        return np.array([self.error_value(n) for n in nominals], dtype=np.float64)

    def corrected_positions(self, nominals: Sequence[float]) -> np.ndarray:
        """Apply corrected_position to each nominal value."""
        return np.array(
            [self.corrected_position(n) for n in nominals], dtype=np.float64
        )

    def nominal_range(self) -> Tuple[float, float]:
        """
        Get the smallest and largest stored nominal values.

        Raises:
            EmptyTableError: If the table holds no points
        """
        if not self._keys:
            raise EmptyTableError()
        return self._keys[0], self._keys[-1]

    def get_map(self) -> Dict[float, float]:
        """Get a copy of the nominal -> error map in ascending key order."""
        return {key: self._errors[key] for key in self._keys}

    def get_map_summary(self) -> str:
        """
        Get a tab separated summary of the error map.

        Returns:
            str: Header line followed by one line per point with the nominal,
            calibrated, error and corrected values
        """
        lines = [SUMMARY_HEADER]
        for key in self._keys:
            error = self.error_value(key)
            lines.append(
                f"{key}\t{key - error}\t\t{error}\t{self.corrected_position(key)}\n"
            )
        return "".join(lines)

    def _store(self, key: float, error: float):
        """Insert or overwrite a single key, keeping keys sorted."""
        if key not in self._errors:
            bisect.insort(self._keys, key)
        self._errors[key] = error

    @staticmethod
    def _interpolate(x: float, x1: float, y1: float, x2: float, y2: float) -> float:
        return y1 + (x - x1) * (y2 - y1) / (x2 - x1)
