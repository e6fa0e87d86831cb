"""
Reporting utilities for presenting reference tables and assessment results.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from .geometry import AspectRatioCategory
from .interpolation import InterpolationTrace
from .pipeline import FacadeAssessment
from .reference_tables import ReferenceTable


CORNER_COLUMNS = ["row", "area_m2", "distance_m", "max_percent"]


def table_to_dataframe(
    table: ReferenceTable, category: Optional[AspectRatioCategory] = None
) -> pd.DataFrame:
    """
    Wide view of one table block: areas as rows, distances as columns.

    Cells are NaN where a row stops before a distance (it has already reached 100%).
    """
    records = {}
    for area in table.areas(category):
        row = table.row(area, category)
        records[area] = dict(zip(row.distances, row.percentages))
    frame = pd.DataFrame.from_dict(records, orient="index")
    frame = frame.reindex(sorted(frame.columns), axis=1)
    frame.index.name = "area_m2"
    frame.columns.name = "distance_m"
    return frame


def trace_to_dataframe(trace: InterpolationTrace) -> pd.DataFrame:
    """The four bracketing corners read from the table, one line each."""
    rows = []
    for label, part in (("lower", trace.lower), ("upper", trace.upper)):
        rows.append((label, part.area, part.distance_lo, part.percentage_lo))
        rows.append((label, part.area, part.distance_hi, part.percentage_hi))
    return pd.DataFrame(rows, columns=CORNER_COLUMNS)


def build_assessment_summary(assessment: FacadeAssessment) -> Dict[str, Any]:
    """
    Flat summary of an assessment for display or export.
    Percentages and areas are rounded to two decimals; raw values stay on the assessment.
    """
    trace = assessment.trace
    return {
        "table": f"3.2.3.1-{assessment.table_code.value}",
        "aspect_ratio": round(assessment.aspect_ratio, 2) if assessment.aspect_ratio is not None else None,
        "aspect_ratio_category": assessment.category.label if assessment.category else None,
        "area_m2": round(assessment.area, 2),
        "limiting_distance_m": assessment.inputs.distance,
        "area_bracket_m2": (trace.area_lo, trace.area_hi),
        "max_percent": round(assessment.max_percentage, 2),
        "max_opening_area_m2": round(assessment.max_opening_area, 2),
        "opening_percent": round(assessment.opening_percentage, 2),
        "conformant": assessment.conformant,
        "verdict": "CONFORMANT" if assessment.conformant else "NON-CONFORMANT",
    }
