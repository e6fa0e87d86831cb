import math

import pytest

import unprotected_openings as uo
from unprotected_openings.calculator import UnprotectedOpeningsCalculator
from unprotected_openings.errors import InvalidGeometryError, UnknownSelectorError
from unprotected_openings.geometry import AspectRatioCategory
from unprotected_openings.interpolation import interpolate
from unprotected_openings.selection import TableCode


# Compartment A: gymnasium (group A div. 2), not sprinklered
WORKED_EXAMPLE = dict(width=26.551, height=10.830, distance=17.48, group="A", division=2, sprinklered=False, area=287.55)


@pytest.fixture
def calc(tables):
    return UnprotectedOpeningsCalculator(tables)


def test_worked_example(calc):
    trace = calc.calculate_with_trace(**WORKED_EXAMPLE)
    assert trace.table_code == TableCode.B
    assert trace.category == AspectRatioCategory.NARROW
    assert (trace.area_lo, trace.area_hi) == (250.0, 350.0)
    assert calc.calculate_percentage(**WORKED_EXAMPLE) == pytest.approx(89.09498, abs=1e-9)


def test_module_level_api_matches_calculator(calc):
    assert uo.calculate_percentage(**WORKED_EXAMPLE) == calc.calculate_percentage(**WORKED_EXAMPLE)
    assert uo.determine_aspect_ratio_category(26.551, 10.830) == "< 3:1"
    assert calc.determine_aspect_ratio_category(26.551, 10.830) == "< 3:1"
    assert uo.max_allowed_area(100.0, 40.0) == calc.max_allowed_area(100.0, 40.0) == 40.0
    assert uo.is_conformant(100.0, 40.0, 40.0) and calc.is_conformant(100.0, 40.0, 40.0)


def test_area_defaults_to_width_times_height(calc, tables):
    pct = calc.calculate_percentage(8.0, 5.0, 3.0, "C", 1, True)
    assert pct == interpolate(tables[TableCode.D], 40.0, 3.0)
    assert pct == 40.0


def test_category_selects_block_for_tables_b_and_c(calc, tables):
    # 60 x 2 is > 10:1
    pct = calc.calculate_percentage(60.0, 2.0, 3.0, "E", 1, False)
    assert pct == interpolate(tables[TableCode.C], 120.0, 3.0, AspectRatioCategory.WIDE)


def test_sprinklered_table_more_permissive(calc):
    args = dict(width=20.0, height=5.0, distance=3.0, group="D", division=1)
    assert calc.calculate_percentage(**args, sprinklered=True) > calc.calculate_percentage(**args, sprinklered=False)


@pytest.mark.parametrize(
    "overrides",
    [
        dict(height=0.0),
        dict(width=-1.0),
        dict(area=0.0),
        dict(area=-10.0),
        dict(distance=-0.5),
    ],
)
def test_invalid_geometry(calc, overrides):
    with pytest.raises(InvalidGeometryError):
        calc.calculate_percentage(**{**WORKED_EXAMPLE, **overrides})


def test_unknown_group(calc):
    with pytest.raises(UnknownSelectorError):
        calc.calculate_percentage(**{**WORKED_EXAMPLE, "group": "X"})


def test_zero_distance_is_allowed(calc):
    assert calc.calculate_percentage(**{**WORKED_EXAMPLE, "distance": 0.0}) == 0.0


def test_default_calculator_is_shared():
    assert uo.get_calculator() is uo.get_calculator()
    assert uo.get_reference_tables() is uo.get_calculator().tables


@pytest.mark.parametrize(
    "overrides",
    [
        dict(distance=math.nan),
        dict(area=math.nan),
        dict(distance=math.inf),
        dict(area=math.inf),
        dict(width=math.nan),
        dict(height=math.inf),
    ],
)
def test_non_finite_inputs_raise_geometry_error(calc, overrides):
    with pytest.raises(InvalidGeometryError):
        calc.calculate_percentage(**{**WORKED_EXAMPLE, **overrides})


def test_two_level_table_ignores_dimensions_when_area_given(calc, tables):
    # sprinklered group A -> table D, which has no L/H level
    args = {**WORKED_EXAMPLE, "sprinklered": True, "area": 40.0, "distance": 3.0}
    assert calc.calculate_percentage(**{**args, "width": 0.0}) == 40.0
    assert calc.calculate_with_trace(**{**args, "height": -1.0}).category is None


def test_dimensions_still_checked_for_two_level_table_without_area(calc):
    with pytest.raises(InvalidGeometryError):
        calc.calculate_percentage(**{**WORKED_EXAMPLE, "sprinklered": True, "area": None, "width": 0.0})


def test_three_level_table_needs_dimensions_even_with_area(calc):
    with pytest.raises(InvalidGeometryError):
        calc.calculate_percentage(**{**WORKED_EXAMPLE, "width": 0.0})
