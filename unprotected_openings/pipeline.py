"""
End-to-end facade assessment:

1. Default the facade area to width × height when not supplied.
2. Select the reference table and aspect-ratio category.
3. Interpolate the maximum unprotected opening percentage.
4. Derive the maximum opening area and the actual opening percentage.
5. Return the conformity verdict with the interpolation working.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .calculator import UnprotectedOpeningsCalculator, get_calculator
from .conformity import is_conformant, max_allowed_area, opening_percentage
from .errors import UnknownSelectorError
from .geometry import AspectRatioCategory, aspect_ratio, facade_area
from .interpolation import InterpolationTrace
from .reference_tables import ReferenceTables
from .selection import OccupancyGroup, TableCode


_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off", ""}


def _parse_flag(value: Any) -> bool:
    """Read a yes/no form value; strings are matched by word, not truthiness."""
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise UnknownSelectorError(f"Unrecognized sprinkler flag: {value!r}")
    if isinstance(value, (bool, int)) and value in (0, 1):
        return bool(value)
    raise UnknownSelectorError(f"Unrecognized sprinkler flag: {value!r}")


@dataclass
class FacadeInput:
    width: float
    height: float
    distance: float
    group: Union[str, OccupancyGroup]
    division: int
    sprinklered: bool
    area: Optional[float] = None
    opening_area: float = 0.0

    @classmethod
    def from_dict(cls, inputs: Dict[str, Any]) -> 'FacadeInput':
        return cls(
            width=float(inputs["width"]),
            height=float(inputs["height"]),
            distance=float(inputs["distance"]),
            group=inputs["group"],
            division=int(inputs.get("division", 1)),
            sprinklered=_parse_flag(inputs.get("sprinklered")),
            area=float(inputs["area"]) if inputs.get("area") else None,
            opening_area=float(inputs.get("opening_area") or 0.0),
        )

    @property
    def effective_area(self) -> float:
        return self.area if self.area is not None else facade_area(self.width, self.height)


def _has_dimensions(facade: FacadeInput) -> bool:
    return all(math.isfinite(v) and v > 0 for v in (facade.width, facade.height))


@dataclass
class FacadeAssessment:
    inputs: FacadeInput
    area: float
    aspect_ratio: Optional[float]
    category: Optional[AspectRatioCategory]
    table_code: TableCode
    max_percentage: float
    max_opening_area: float
    opening_percentage: float
    conformant: bool
    trace: InterpolationTrace


def assess_facade(
    facade: FacadeInput,
    *,
    tables: Optional[ReferenceTables] = None,
) -> FacadeAssessment:
    """
    Execute the full calculation and return a FacadeAssessment.
    """
    calculator = UnprotectedOpeningsCalculator(tables) if tables is not None else get_calculator()
    area = facade.effective_area

    trace = calculator.calculate_with_trace(
        facade.width,
        facade.height,
        facade.distance,
        facade.group,
        facade.division,
        facade.sprinklered,
        area,
    )
    # D/E with an explicit area may come without usable dimensions
    ratio = aspect_ratio(facade.width, facade.height) if _has_dimensions(facade) else None

    return FacadeAssessment(
        inputs=facade,
        area=area,
        aspect_ratio=ratio,
        category=AspectRatioCategory.from_ratio(ratio) if ratio is not None else None,
        table_code=trace.table_code,
        max_percentage=trace.percentage,
        max_opening_area=max_allowed_area(area, trace.percentage),
        opening_percentage=opening_percentage(area, facade.opening_area),
        conformant=is_conformant(area, facade.opening_area, trace.percentage),
        trace=trace,
    )
