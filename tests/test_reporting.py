import math

import plotly.graph_objects as go
import pytest

from unprotected_openings.geometry import AspectRatioCategory
from unprotected_openings.interpolation import interpolate_with_trace
from unprotected_openings.pipeline import FacadeInput, assess_facade
from unprotected_openings.reporting import (
    CORNER_COLUMNS,
    build_assessment_summary,
    table_to_dataframe,
    trace_to_dataframe,
)
from unprotected_openings.selection import TableCode
from unprotected_openings.visualization import create_percentage_curve_figure


def test_table_to_dataframe_two_level(tables):
    df = table_to_dataframe(tables[TableCode.D])
    assert list(df.index) == list(tables[TableCode.D].areas())
    assert df.loc[10.0, 2.0] == 42
    # the 10 m² row stops at 3 m
    assert math.isnan(df.loc[10.0, 9.0])
    assert list(df.columns) == sorted(df.columns)


def test_table_to_dataframe_three_level(tables):
    df = table_to_dataframe(tables[TableCode.B], AspectRatioCategory.NARROW)
    assert df.loc[250.0, 16.0] == 87
    assert df.loc[350.0, 25.0] == 100


def test_trace_to_dataframe_has_four_corners(tables):
    trace = interpolate_with_trace(tables[TableCode.B], 287.55, 17.48, AspectRatioCategory.NARROW)
    df = trace_to_dataframe(trace)
    assert list(df.columns) == CORNER_COLUMNS
    assert len(df) == 4
    assert list(df["max_percent"]) == [87, 100, 64, 81]
    assert list(df["area_m2"]) == [250.0, 250.0, 350.0, 350.0]


def test_assessment_summary(tables):
    result = assess_facade(
        FacadeInput(width=26.551, height=10.830, distance=17.48, group="A", division=2,
                    sprinklered=False, area=287.55, opening_area=157.34),
        tables=tables,
    )
    summary = build_assessment_summary(result)
    assert summary["table"] == "3.2.3.1-B"
    assert summary["aspect_ratio_category"] == "< 3:1"
    assert summary["max_percent"] == 89.09
    assert summary["area_bracket_m2"] == (250.0, 350.0)
    assert summary["verdict"] == "CONFORMANT"


def test_curve_figure_with_two_rows_and_query(tables):
    fig = create_percentage_curve_figure(tables[TableCode.B], 287.55, AspectRatioCategory.NARROW, 17.48)
    assert isinstance(fig, go.Figure)
    # lower row, upper row, interpolated curve, query marker
    assert len(fig.data) == 4
    assert fig.data[-1].y[0] == pytest.approx(89.09498, abs=1e-9)
    assert "3.2.3.1-B" in fig.layout.title.text


def test_curve_figure_on_exact_area_row(tables):
    fig = create_percentage_curve_figure(tables[TableCode.E], 50.0)
    assert len(fig.data) == 2
    assert list(fig.data[0].y) == list(tables[TableCode.E].row(50.0).percentages)
