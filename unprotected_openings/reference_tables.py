"""
Reference table store for CNB 2015 Tables 3.2.3.1-B to 3.2.3.1-E.

The tables ship as a long-format CSV asset (one line per tabulated point):

    table, aspect_ratio, area_m2, distance_m, max_percent

`aspect_ratio` holds an AspectRatioCategory value for tables B and C and is
left empty for tables D and E. The loader turns the file into immutable
ReferenceTable objects with explicitly sorted breakpoints and validates every
row once, at load time. Nothing downstream relies on file or key order.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .errors import MalformedTableError, UnknownSelectorError
from .geometry import AspectRatioCategory
from .selection import TableCode

logger = logging.getLogger(__name__)


TABLES_PATH_ENV = "UO_TABLES_PATH"
DEFAULT_TABLES_PATH = Path(__file__).resolve().parent / "data" / "tables_3231.csv"

REQUIRED_COLUMNS = ("table", "aspect_ratio", "area_m2", "distance_m", "max_percent")

RowKey = Tuple[Optional[AspectRatioCategory], float]


@dataclass(frozen=True)
class TableRow:
    """
    One area row of a reference table

    Attributes:
        area: Facade area breakpoint (m²)
        distances: Limiting distance breakpoints (m), strictly increasing
        percentages: Maximum unprotected opening percentage at each distance
    """
    area: float
    distances: Tuple[float, ...]
    percentages: Tuple[float, ...]

    def percentage_at(self, distance: float) -> float:
        """Tabulated percentage at an exact distance breakpoint."""
        try:
            return self.percentages[self.distances.index(distance)]
        except ValueError:
            raise KeyError(
                f"Distance {distance} m is not a breakpoint of the {self.area:g} m² row"
            ) from None

    def __len__(self) -> int:
        return len(self.distances)


@dataclass(frozen=True)
class ReferenceTable:
    """
    A single Table 3.2.3.1 variant

    Rows are keyed by (category, area). For tables D and E the category is
    always None; for B and C it is the facade's AspectRatioCategory.
    """
    code: TableCode
    rows: Mapping[RowKey, TableRow]
    area_breakpoints: Mapping[Optional[AspectRatioCategory], Tuple[float, ...]]

    @property
    def keyed_by_aspect_ratio(self) -> bool:
        return self.code.keyed_by_aspect_ratio

    def resolve_category(
        self, category: Optional[AspectRatioCategory]
    ) -> Optional[AspectRatioCategory]:
        if not self.keyed_by_aspect_ratio:
            return None
        if category is None:
            raise UnknownSelectorError(
                f"Table {self.code.value} requires an aspect-ratio category"
            )
        return category

    def categories(self) -> Tuple[Optional[AspectRatioCategory], ...]:
        return tuple(self.area_breakpoints)

    def areas(self, category: Optional[AspectRatioCategory] = None) -> Tuple[float, ...]:
        """Sorted area breakpoints for the category (ignored for D/E)."""
        return self.area_breakpoints[self.resolve_category(category)]

    def row(self, area: float, category: Optional[AspectRatioCategory] = None) -> TableRow:
        key = (self.resolve_category(category), float(area))
        if key not in self.rows:
            raise KeyError(f"Table {self.code.value} has no {area:g} m² row")
        return self.rows[key]

    def iter_rows(self) -> Iterator[Tuple[Optional[AspectRatioCategory], TableRow]]:
        for category, areas in self.area_breakpoints.items():
            for area in areas:
                yield category, self.rows[(category, area)]


class ReferenceTables:
    """
    Read-only store of the four reference tables

    Example:
        tables = load_reference_tables()
        table_b = tables[TableCode.B]   # or tables["B"]
    """

    def __init__(self, tables: Mapping[TableCode, ReferenceTable], source: Optional[Path] = None):
        self._tables = MappingProxyType(dict(tables))
        self.source = source

    def __getitem__(self, code: Union[str, TableCode]) -> ReferenceTable:
        if not isinstance(code, TableCode):
            try:
                code = TableCode(str(code).strip().upper())
            except ValueError:
                raise UnknownSelectorError(f"Unknown table code {code!r}") from None
        return self._tables[code]

    def __iter__(self) -> Iterator[TableCode]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        row_count = sum(len(t.rows) for t in self._tables.values())
        return f"ReferenceTables({len(self._tables)} tables, {row_count} rows)"


# ============================================================================
# LOADING
# ============================================================================

def _validate_row(code: TableCode, category: Optional[AspectRatioCategory], row: TableRow) -> None:
    where = f"table {code.value}" + (f" [{category.label}]" if category else "") + f" area {row.area:g} m²"
    if not row.distances:
        raise MalformedTableError(f"Empty distance row in {where}")

    distances = np.asarray(row.distances, dtype=float)
    percentages = np.asarray(row.percentages, dtype=float)

    if np.any(np.diff(distances) <= 0):
        raise MalformedTableError(f"Distances must be strictly increasing in {where}")
    if np.any(np.diff(percentages) < 0):
        raise MalformedTableError(f"Percentages decrease with distance in {where}")
    if percentages.min() < 0 or percentages.max() > 100:
        raise MalformedTableError(f"Percentages outside 0-100 in {where}")
    if percentages[-1] != 100:
        raise MalformedTableError(
            f"Row does not saturate at 100% by its last distance in {where} "
            f"(ends at {percentages[-1]:g}%)"
        )


def _parse_category(code: TableCode, label: str) -> Optional[AspectRatioCategory]:
    if not code.keyed_by_aspect_ratio:
        if label:
            raise MalformedTableError(
                f"Table {code.value} is not keyed by aspect ratio (found {label!r})"
            )
        return None
    try:
        return AspectRatioCategory(label)
    except ValueError:
        raise MalformedTableError(
            f"Table {code.value} has unknown aspect-ratio category {label!r}"
        ) from None


def _build_table(code: TableCode, frame: pd.DataFrame) -> ReferenceTable:
    rows: Dict[RowKey, TableRow] = {}
    areas: Dict[Optional[AspectRatioCategory], List[float]] = {}

    for (label, area), group in frame.groupby(["aspect_ratio", "area_m2"], sort=True):
        category = _parse_category(code, label)
        group = group.sort_values("distance_m", kind="mergesort")
        row = TableRow(
            area=float(area),
            distances=tuple(float(d) for d in group["distance_m"]),
            percentages=tuple(float(p) for p in group["max_percent"]),
        )
        _validate_row(code, category, row)
        rows[(category, row.area)] = row
        areas.setdefault(category, []).append(row.area)

    if code.keyed_by_aspect_ratio:
        missing = [c.value for c in AspectRatioCategory if c not in areas]
        if missing:
            raise MalformedTableError(f"Table {code.value} is missing categories: {missing}")
        reference = sorted(areas[AspectRatioCategory.NARROW])
        for category in AspectRatioCategory:
            if sorted(areas[category]) != reference:
                raise MalformedTableError(
                    f"Table {code.value} area breakpoints differ for category {category.label}"
                )
        ordered = {c: tuple(sorted(areas[c])) for c in AspectRatioCategory}
    else:
        ordered = {None: tuple(sorted(areas[None]))}

    return ReferenceTable(
        code=code,
        rows=MappingProxyType(rows),
        area_breakpoints=MappingProxyType(ordered),
    )


def build_reference_tables(frame: pd.DataFrame, source: Optional[Path] = None) -> ReferenceTables:
    """
    Build and validate the table store from a long-format DataFrame

    Raises:
        MalformedTableError: Missing columns, non-numeric cells, unknown or
            missing table codes, or any row breaking the table invariants
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise MalformedTableError(f"Reference table data is missing columns: {missing}")

    frame = frame.loc[:, list(REQUIRED_COLUMNS)].copy()
    frame["table"] = frame["table"].astype(str).str.strip().str.upper()
    frame["aspect_ratio"] = frame["aspect_ratio"].fillna("").astype(str).str.strip().str.lower()
    for column in ("area_m2", "distance_m", "max_percent"):
        frame[column] = pd.to_numeric(frame[column], errors="coerce")
    bad = frame[frame[["area_m2", "distance_m", "max_percent"]].isna().any(axis=1)]
    if not bad.empty:
        raise MalformedTableError(
            f"Non-numeric reference table values on {len(bad)} line(s), first at index {bad.index[0]}"
        )

    known = {c.value for c in TableCode}
    unknown = sorted(set(frame["table"]) - known)
    if unknown:
        raise MalformedTableError(f"Unknown table codes in reference data: {unknown}")

    tables: Dict[TableCode, ReferenceTable] = {}
    for code in TableCode:
        subset = frame[frame["table"] == code.value]
        if subset.empty:
            raise MalformedTableError(f"Reference data has no rows for table {code.value}")
        tables[code] = _build_table(code, subset)

    store = ReferenceTables(tables, source=source)
    logger.info("Loaded %r from %s", store, source or "DataFrame")
    return store


def resolve_tables_path(path: Optional[Union[str, Path]] = None) -> Path:
    return Path(path or os.environ.get(TABLES_PATH_ENV) or DEFAULT_TABLES_PATH)


def load_reference_tables(path: Optional[Union[str, Path]] = None) -> ReferenceTables:
    """
    Load the reference tables from CSV

    Args:
        path: CSV location. Falls back to $UO_TABLES_PATH, then the packaged
            data/tables_3231.csv

    Returns:
        Validated ReferenceTables store
    """
    source = resolve_tables_path(path)
    try:
        frame = pd.read_csv(source, dtype={"table": str, "aspect_ratio": str}, keep_default_na=False)
    except FileNotFoundError as exc:
        raise MalformedTableError(f"Reference table file not found: {source}") from exc
    return build_reference_tables(frame, source=source)


@lru_cache(maxsize=1)
def get_reference_tables() -> ReferenceTables:
    """Process-wide table store, loaded on first use."""
    return load_reference_tables()
