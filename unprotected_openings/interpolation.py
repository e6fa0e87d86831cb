"""
Two-stage bilinear interpolation over a reference table.

The grid is irregular: every area row has its own distance breakpoints. The
lookup therefore brackets the area first, then brackets the distance
separately on each of the two bracketing rows, interpolates along distance
on each row, and finally interpolates the two row results along area.

Values outside the tabulated range are clamped to the nearest breakpoint,
never extrapolated. Negative area or distance is a caller precondition and
is not checked here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import MalformedTableError
from .geometry import AspectRatioCategory
from .reference_tables import ReferenceTable, TableRow
from .selection import TableCode

logger = logging.getLogger(__name__)


def _bracket_indices(breakpoints: Sequence[float], value: float) -> Tuple[int, int]:
    points = np.asarray(breakpoints, dtype=float)
    if points.size == 0:
        raise MalformedTableError("Cannot bracket a value against an empty breakpoint set")

    last = points.size - 1
    if value <= points[0]:
        return 0, 0
    if value >= points[last]:
        return last, last

    idx = int(np.searchsorted(points, value, side="left"))
    if points[idx] == value:
        return idx, idx
    return idx - 1, idx


def bracket(breakpoints: Sequence[float], value: float) -> Tuple[float, float]:
    """
    Find the breakpoints on either side of a value

    Args:
        breakpoints: Sorted, strictly increasing breakpoints
        value: Queried value

    Returns:
        (lo, hi) with lo <= value <= hi. Both equal the first breakpoint when
        value is below the range, the last one when above it, and value
        itself on an exact hit.

    Raises:
        MalformedTableError: If breakpoints is empty
    """
    lo, hi = _bracket_indices(breakpoints, value)
    return float(breakpoints[lo]), float(breakpoints[hi])


def _lerp(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    if x0 == x1:
        return y0
    return y0 + (x - x0) / (x1 - x0) * (y1 - y0)


@dataclass(frozen=True)
class RowInterpolation:
    """First-stage (distance) interpolation on one area row"""
    area: float
    distance_lo: float
    distance_hi: float
    percentage_lo: float
    percentage_hi: float
    percentage: float


@dataclass(frozen=True)
class InterpolationTrace:
    """
    Full record of one lookup

    lower/upper are the first-stage results on the area rows bracketing the
    query (the same object when the area bracket is degenerate).
    """
    table_code: TableCode
    category: Optional[AspectRatioCategory]
    area: float
    distance: float
    lower: RowInterpolation
    upper: RowInterpolation
    percentage: float

    @property
    def area_lo(self) -> float:
        return self.lower.area

    @property
    def area_hi(self) -> float:
        return self.upper.area


def interpolate_row(row: TableRow, distance: float) -> RowInterpolation:
    lo, hi = _bracket_indices(row.distances, distance)
    d_lo, d_hi = row.distances[lo], row.distances[hi]
    p_lo, p_hi = row.percentages[lo], row.percentages[hi]
    return RowInterpolation(
        area=row.area,
        distance_lo=d_lo,
        distance_hi=d_hi,
        percentage_lo=p_lo,
        percentage_hi=p_hi,
        percentage=_lerp(distance, d_lo, d_hi, p_lo, p_hi),
    )


def interpolate_with_trace(
    table: ReferenceTable,
    area: float,
    distance: float,
    category: Optional[AspectRatioCategory] = None,
) -> InterpolationTrace:
    """
    Interpolate the maximum opening percentage and keep the working

    Args:
        table: Reference table to read
        area: Facade area (m²)
        distance: Limiting distance (m)
        category: Aspect-ratio category, required for tables B and C and
            ignored for D and E

    Returns:
        InterpolationTrace with the bracketing rows and the final percentage
    """
    category = table.resolve_category(category)
    areas = table.areas(category)
    lo, hi = _bracket_indices(areas, area)

    lower = interpolate_row(table.row(areas[lo], category), distance)
    upper = lower if hi == lo else interpolate_row(table.row(areas[hi], category), distance)
    percentage = _lerp(area, lower.area, upper.area, lower.percentage, upper.percentage)

    logger.debug(
        "Table %s%s area=%s (%s-%s) distance=%s -> %.4f%%",
        table.code.value,
        f" [{category.label}]" if category else "",
        area, lower.area, upper.area, distance, percentage,
        extra={"table": table.code.value, "area": area, "distance": distance,
               "category": category.value if category else None},
    )
    return InterpolationTrace(
        table_code=table.code,
        category=category,
        area=area,
        distance=distance,
        lower=lower,
        upper=upper,
        percentage=percentage,
    )


def interpolate(
    table: ReferenceTable,
    area: float,
    distance: float,
    category: Optional[AspectRatioCategory] = None,
) -> float:
    """Maximum unprotected opening percentage, unrounded."""
    return interpolate_with_trace(table, area, distance, category).percentage
