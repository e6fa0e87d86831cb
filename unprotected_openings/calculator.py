"""
Unprotected openings calculator

Public entry point tying table selection, aspect-ratio classification and
bilinear interpolation together:

    caller inputs -> select_table -> (B/C) classify_aspect_ratio
                  -> interpolate -> percentage

The module-level functions use a shared calculator built on the packaged
reference tables; construct UnprotectedOpeningsCalculator directly to use
another table store.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from .conformity import is_conformant as _is_conformant
from .conformity import max_allowed_area as _max_allowed_area
from .errors import InvalidGeometryError
from .geometry import classify_aspect_ratio, facade_area
from .interpolation import InterpolationTrace, interpolate_with_trace
from .reference_tables import ReferenceTables, get_reference_tables
from .selection import OccupancyGroup, TableCode, select_table

logger = logging.getLogger(__name__)


class UnprotectedOpeningsCalculator:
    """
    Maximum unprotected opening percentage per CNB 2015 Table 3.2.3.1

    Example:
        calc = UnprotectedOpeningsCalculator()
        pct = calc.calculate_percentage(26.551, 10.830, 17.48, 'A', 2, False, 287.55)
    """

    def __init__(self, tables: Optional[ReferenceTables] = None):
        """
        Args:
            tables: Table store; defaults to the process-wide packaged tables
        """
        self.tables = tables if tables is not None else get_reference_tables()

    # ------------------------------------------------------------------ public
    def select_table(self, group: Union[str, OccupancyGroup], division: int, sprinklered: bool) -> TableCode:
        return select_table(group, division, sprinklered)

    def determine_aspect_ratio_category(self, width: float, height: float) -> str:
        return classify_aspect_ratio(width, height).label

    def calculate_with_trace(
        self,
        width: float,
        height: float,
        distance: float,
        group: Union[str, OccupancyGroup],
        division: int,
        sprinklered: bool,
        area: Optional[float] = None,
    ) -> InterpolationTrace:
        """
        Run the full lookup and return the interpolation working

        Args:
            width: Facade width (m)
            height: Facade height (m)
            distance: Limiting distance (m)
            group: Occupancy group A-F
            division: Occupancy division (1-3, used for group F)
            sprinklered: Fully sprinklered building
            area: Exposing building face area (m²); width × height when omitted

        Raises:
            InvalidGeometryError: Non-finite inputs, a non-positive area, a
                negative distance, or non-positive width/height where they
                are used (area omitted, or table B/C)
            UnknownSelectorError: Unrecognized occupancy group/division
        """
        if area is None:
            area = facade_area(width, height)
        elif not math.isfinite(area) or area <= 0:
            raise InvalidGeometryError(f"Facade area must be positive and finite (got {area})")
        if not math.isfinite(distance) or distance < 0:
            raise InvalidGeometryError(f"Limiting distance must be finite and non-negative (got {distance})")

        code = select_table(group, division, sprinklered)
        table = self.tables[code]
        # D/E rows ignore L/H, so the dimensions only matter through the area
        category = classify_aspect_ratio(width, height) if table.keyed_by_aspect_ratio else None
        logger.debug("Facade %s x %s m, area %g m², distance %g m, table %s, L/H %s",
                     width, height, area, distance, code.value,
                     category.label if category else "n/a")
        return interpolate_with_trace(table, area, distance, category)

    def calculate_percentage(
        self,
        width: float,
        height: float,
        distance: float,
        group: Union[str, OccupancyGroup],
        division: int,
        sprinklered: bool,
        area: Optional[float] = None,
    ) -> float:
        """Maximum unprotected opening percentage (unrounded)."""
        return self.calculate_with_trace(
            width, height, distance, group, division, sprinklered, area
        ).percentage

    def max_allowed_area(self, total_area: float, percentage: float) -> float:
        return _max_allowed_area(total_area, percentage)

    def is_conformant(self, total_area: float, opening_area: float, percentage: float) -> bool:
        return _is_conformant(total_area, opening_area, percentage)

    def __repr__(self) -> str:
        return f"UnprotectedOpeningsCalculator({self.tables!r})"


_default_calculator: Optional[UnprotectedOpeningsCalculator] = None


def get_calculator() -> UnprotectedOpeningsCalculator:
    """Shared calculator over the packaged tables, created on first use."""
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = UnprotectedOpeningsCalculator()
    return _default_calculator


def calculate_percentage(
    width: float,
    height: float,
    distance: float,
    group: Union[str, OccupancyGroup],
    division: int,
    sprinklered: bool,
    area: Optional[float] = None,
) -> float:
    return get_calculator().calculate_percentage(
        width, height, distance, group, division, sprinklered, area
    )
