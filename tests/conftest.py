import pandas as pd
import pytest

from unprotected_openings.reference_tables import DEFAULT_TABLES_PATH, load_reference_tables


@pytest.fixture(scope="session")
def tables():
    return load_reference_tables(DEFAULT_TABLES_PATH)


@pytest.fixture(scope="session")
def all_rows(tables):
    """(code, category, row) for every row of every table"""
    return [
        (code, category, row)
        for code in tables
        for category, row in tables[code].iter_rows()
    ]


@pytest.fixture
def raw_frame():
    """Packaged reference data as a DataFrame, for corrupting in tests."""
    return pd.read_csv(DEFAULT_TABLES_PATH, dtype={"table": str, "aspect_ratio": str}, keep_default_na=False)
