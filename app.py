"""
Unprotected Openings Calculator
Interactive check of an exposing building face against CNB 2015 Table 3.2.3.1
"""

import streamlit as st

from unprotected_openings import (
    FacadeInput,
    UnprotectedOpeningsError,
    assess_facade,
    get_reference_tables,
)
from unprotected_openings.logging_config import setup_logging
from unprotected_openings.reporting import (
    build_assessment_summary,
    table_to_dataframe,
    trace_to_dataframe,
)
from unprotected_openings.visualization import create_percentage_curve_figure

setup_logging()

# Page config
st.set_page_config(
    page_title="Unprotected Openings Calculator",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🔥 Unprotected Openings Calculator")
st.markdown("**Maximum percentage of unprotected openings per CNB 2015, Tables 3.2.3.1-B to E**")


@st.cache_resource
def load_tables():
    return get_reference_tables()


tables = load_tables()

# Sidebar - Input Parameters
st.sidebar.header("Exposing Building Face")

st.sidebar.markdown("### Dimensions")
width = st.sidebar.number_input("Width (m)", min_value=0.0, value=26.551, step=0.1, format="%.3f")
height = st.sidebar.number_input("Height (m)", min_value=0.0, value=10.830, step=0.1, format="%.3f")

# Area follows width × height unless overridden
override_area = st.sidebar.checkbox("Enter facade area manually", value=False)
if override_area:
    area = st.sidebar.number_input("Facade area (m²)", min_value=0.0, value=round(width * height, 2), step=1.0)
else:
    area = None
    st.sidebar.info(f"**Facade area: {width * height:,.2f} m²**")

distance = st.sidebar.number_input("Limiting distance (m)", min_value=0.0, value=17.48, step=0.1)

st.sidebar.markdown("### Occupancy")
group = st.sidebar.selectbox("Major occupancy group", ["A", "B", "C", "D", "E", "F"], index=0)
division = st.sidebar.selectbox("Division", [1, 2, 3], index=1)
sprinklered = st.sidebar.radio(
    "Sprinkler protection",
    options=[False, True],
    format_func=lambda v: "Fully sprinklered" if v else "Not fully sprinklered",
)

st.sidebar.markdown("### Openings")
opening_area = st.sidebar.number_input("Unprotected opening area (m²)", min_value=0.0, value=157.34, step=1.0)

if not width or not height:
    st.warning("Width and height are required.")
    st.stop()

try:
    assessment = assess_facade(
        FacadeInput(
            width=width,
            height=height,
            distance=distance,
            group=group,
            division=division,
            sprinklered=sprinklered,
            area=area,
            opening_area=opening_area,
        ),
        tables=tables,
    )
except UnprotectedOpeningsError as exc:
    st.error(str(exc))
    st.stop()

summary = build_assessment_summary(assessment)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Table", summary["table"])
if summary["aspect_ratio"] is None:
    col2.metric("L/H ratio", "n/a")
else:
    col2.metric("L/H ratio", f"{summary['aspect_ratio']:.2f}", summary["aspect_ratio_category"], delta_color="off")
col3.metric("Max. unprotected openings", f"{assessment.max_percentage:.2f}%")
col4.metric("Max. opening area", f"{assessment.max_opening_area:,.2f} m²")

if assessment.conformant:
    st.success(f"CONFORMANT: actual openings {assessment.opening_percentage:.2f}% "
               f"≤ {assessment.max_percentage:.2f}%")
else:
    st.error(f"NON-CONFORMANT: actual openings {assessment.opening_percentage:.2f}% "
             f"> {assessment.max_percentage:.2f}%")

table = tables[assessment.table_code]
category = assessment.trace.category

st.plotly_chart(
    create_percentage_curve_figure(table, assessment.area, category, distance),
    use_container_width=True,
)

with st.expander("Interpolation details"):
    st.dataframe(trace_to_dataframe(assessment.trace), use_container_width=True)
    st.json(summary)

with st.expander(f"Reference table 3.2.3.1-{table.code.value}"):
    st.dataframe(table_to_dataframe(table, category), use_container_width=True)
