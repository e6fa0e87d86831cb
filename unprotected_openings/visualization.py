"""
Plotly charts for the reference tables.

The curve figure shows the two area rows bracketing a facade area, the curve
interpolated between them and, optionally, the queried limiting distance.
Designed for Streamlit integration (st.plotly_chart).
"""

import plotly.graph_objects as go
import numpy as np
from typing import Optional

from .geometry import AspectRatioCategory
from .interpolation import bracket, interpolate
from .reference_tables import ReferenceTable


COLORS = {
    'row_lower': 'rgb(100, 120, 140)',  # Blue-gray for the smaller area row
    'row_upper': 'rgb(139, 90, 43)',  # Brown for the larger area row
    'interpolated': 'rgb(200, 100, 0)',  # Orange for the facade's own curve
    'query': 'rgba(220, 40, 40, 0.9)',
}

# Samples along the distance axis for the interpolated curve
CURVE_SAMPLES = 200


def create_percentage_curve_figure(
    table: ReferenceTable,
    area: float,
    category: Optional[AspectRatioCategory] = None,
    distance: Optional[float] = None,
) -> go.Figure:
    """
    Build the percentage-vs-distance chart for one facade area

    Args:
        table: Reference table in use
        area: Facade area (m²)
        category: Aspect-ratio category (tables B/C)
        distance: Limiting distance to mark, if any

    Returns:
        Plotly Figure with one trace per bracketing row, the interpolated
        curve, and a marker at (distance, percentage) when distance is given
    """
    category = table.resolve_category(category)
    area_lo, area_hi = bracket(table.areas(category), area)

    fig = go.Figure()
    rows = [('row_lower', area_lo)] if area_lo == area_hi else [('row_lower', area_lo), ('row_upper', area_hi)]
    max_distance = 0.0
    for color_key, row_area in rows:
        row = table.row(row_area, category)
        max_distance = max(max_distance, row.distances[-1])
        fig.add_trace(go.Scatter(
            x=list(row.distances),
            y=list(row.percentages),
            mode='lines+markers',
            name=f"{row_area:g} m² (tabulated)",
            line=dict(color=COLORS[color_key], dash='dot'),
        ))

    samples = np.linspace(0.0, max_distance, CURVE_SAMPLES)
    fig.add_trace(go.Scatter(
        x=samples,
        y=[interpolate(table, area, float(d), category) for d in samples],
        mode='lines',
        name=f"{area:g} m² (interpolated)",
        line=dict(color=COLORS['interpolated'], width=3),
    ))

    if distance is not None:
        pct = interpolate(table, area, distance, category)
        fig.add_trace(go.Scatter(
            x=[distance],
            y=[pct],
            mode='markers+text',
            name='Limiting distance',
            text=[f"{pct:.2f}%"],
            textposition='top left',
            marker=dict(color=COLORS['query'], size=12, symbol='x'),
        ))

    title = f"Table 3.2.3.1-{table.code.value}"
    if category is not None:
        title += f" (L/H {category.label})"
    fig.update_layout(
        title=title,
        xaxis_title="Limiting distance (m)",
        yaxis_title="Max. unprotected openings (%)",
        yaxis=dict(range=[0, 105]),
        template='plotly_white',
        legend=dict(orientation='h', yanchor='bottom', y=-0.3),
    )
    return fig
