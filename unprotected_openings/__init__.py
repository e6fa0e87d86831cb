"""
Unprotected openings calculator

Maximum permitted percentage of unprotected openings in an exposing building
face, per CNB 2015 Tables 3.2.3.1-B to 3.2.3.1-E (bilinear interpolation on
facade area and limiting distance).

Main API:
    - calculate_percentage: Maximum opening percentage for a facade
    - determine_aspect_ratio_category: L/H category label
    - max_allowed_area / is_conformant: Conformity checks
    - assess_facade: Full assessment with interpolation working
"""

from .calculator import UnprotectedOpeningsCalculator, calculate_percentage, get_calculator
from .conformity import is_conformant, max_allowed_area, opening_percentage
from .errors import (
    DivisionByZeroError,
    InvalidGeometryError,
    MalformedTableError,
    UnknownSelectorError,
    UnprotectedOpeningsError,
)
from .geometry import AspectRatioCategory, classify_aspect_ratio, determine_aspect_ratio_category
from .interpolation import InterpolationTrace, bracket, interpolate, interpolate_with_trace
from .pipeline import FacadeAssessment, FacadeInput, assess_facade
from .reference_tables import ReferenceTable, ReferenceTables, get_reference_tables, load_reference_tables
from .selection import OccupancyGroup, TableCode, select_table

__all__ = [
    # Calculation
    'UnprotectedOpeningsCalculator',
    'calculate_percentage',
    'get_calculator',
    'determine_aspect_ratio_category',
    'classify_aspect_ratio',
    'AspectRatioCategory',
    'select_table',
    'TableCode',
    'OccupancyGroup',
    'bracket',
    'interpolate',
    'interpolate_with_trace',
    'InterpolationTrace',

    # Conformity
    'is_conformant',
    'max_allowed_area',
    'opening_percentage',
    'FacadeInput',
    'FacadeAssessment',
    'assess_facade',

    # Reference data
    'ReferenceTable',
    'ReferenceTables',
    'load_reference_tables',
    'get_reference_tables',

    # Errors
    'UnprotectedOpeningsError',
    'InvalidGeometryError',
    'UnknownSelectorError',
    'MalformedTableError',
    'DivisionByZeroError',
]
