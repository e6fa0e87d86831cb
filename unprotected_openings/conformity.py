"""
Facade conformity checks against a maximum unprotected opening percentage.
"""

import math

from .errors import DivisionByZeroError, InvalidGeometryError


def _check_areas(total_facade_area: float, opening_area: float = 0.0) -> None:
    if total_facade_area == 0:
        raise DivisionByZeroError("Total facade area is zero; opening percentage is undefined")
    if total_facade_area < 0:
        raise InvalidGeometryError(f"Total facade area must be positive (got {total_facade_area})")
    if opening_area < 0:
        raise InvalidGeometryError(f"Unprotected opening area cannot be negative (got {opening_area})")


def opening_percentage(total_facade_area: float, unprotected_opening_area: float) -> float:
    """Actual unprotected opening area as a percentage of the facade area."""
    _check_areas(total_facade_area, unprotected_opening_area)
    return unprotected_opening_area / total_facade_area * 100


def is_conformant(
    total_facade_area: float,
    unprotected_opening_area: float,
    max_allowed_percentage: float,
) -> bool:
    """
    Check a facade's openings against the allowed percentage

    Args:
        total_facade_area: Exposing building face area (m²)
        unprotected_opening_area: Glazed / unprotected area (m²)
        max_allowed_percentage: Interpolated limit (%)

    Returns:
        True when the actual percentage is at or below the limit

    Raises:
        DivisionByZeroError: If total_facade_area is zero
        InvalidGeometryError: If either area is negative
    """
    return opening_percentage(total_facade_area, unprotected_opening_area) <= max_allowed_percentage


def max_allowed_area(total_facade_area: float, max_allowed_percentage: float) -> float:
    """
    Largest unprotected opening area (m²) the percentage permits.

    total × percentage / 100, stepped down by the last ulp or two when float
    round-off would otherwise push it just over the limit on the way back.
    """
    area = total_facade_area * max_allowed_percentage / 100
    if total_facade_area > 0:
        while area > 0 and area / total_facade_area * 100 > max_allowed_percentage:
            area = math.nextafter(area, 0.0)
    return area
