"""
Data Layer: Loads the Superstore sales file and aggregates profit.

File expected at  <project_root>/data/superstore.csv  (override: SUPERSTORE_DATA_PATH).
One row per order line; the story uses these columns:
  State, Category, Product Name      : text
  Sales, Quantity, Discount, Profit  : numeric (Discount is a 0–1 fraction)

Data-quality policy: a row with a blank State or Category, or whose numeric
text does not parse (or parses to inf/nan), is rejected before aggregation and
reported as a DataQualityIssue. It is never counted as zero.
"""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import numpy as np
import pandas as pd
from loguru import logger

from . import config
from .exceptions import ColumnMismatchError, DataLoadError

REQUIRED_COLUMNS = ["State", "Category", "Product Name", "Sales", "Quantity", "Discount", "Profit"]
TEXT_COLUMNS = ["State", "Category", "Product Name"]
NUMERIC_COLUMNS = ["Sales", "Quantity", "Discount", "Profit"]
KEY_COLUMNS = ["State", "Category"]


# ── Types ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DataQualityIssue:
    """A rejected record: data row (0-based), first bad column, raw text."""
    row: int
    column: str
    value: str


@dataclass(frozen=True)
class Groupings:
    """Profit summed by State, by Category, and by State → Category. Read-only."""
    by_state: Mapping[str, float]
    by_category: Mapping[str, float]
    by_state_and_category: Mapping[str, Mapping[str, float]]

    @property
    def is_empty(self) -> bool:
        return not self.by_state

    def states(self) -> list[str]:
        """Distinct states in display (ascending) order."""
        return sorted(self.by_state)

    def categories_for(self, state: str) -> list[tuple[str, float]]:
        """(category, profit) pairs for one state; empty when the state is unknown."""
        return list(self.by_state_and_category.get(state, {}).items())


@dataclass(frozen=True, eq=False)
class StorySession:
    """Everything the scenes read, loaded once and shared by reference."""
    records: pd.DataFrame
    groupings: Groupings
    issues: tuple[DataQualityIssue, ...] = ()
    source: Path | None = None
    kpis: dict = field(default_factory=dict)


# ── Loading ───────────────────────────────────────────────────────────────────

def load_records(path: Path | str, sep: str = ",") -> tuple[pd.DataFrame, list[DataQualityIssue]]:
    """
    Read the sales file as text and parse it into typed records.

    Raises:
        DataLoadError      : file missing, empty, or not parseable as delimited text
        ColumnMismatchError: header lacks one of REQUIRED_COLUMNS

    Returns:
        records: typed DataFrame, rejected rows removed
        issues : one DataQualityIssue per rejected row
    """
    path = Path(path)
    if not path.is_file():
        raise DataLoadError(f"Sales file not found: {path}")

    try:
        raw = pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise DataLoadError(f"Could not read sales file {path}: {exc}") from exc

    raw.columns = raw.columns.str.strip()
    missing = set(REQUIRED_COLUMNS) - set(raw.columns)
    if missing:
        raise ColumnMismatchError(missing, set(raw.columns))

    return parse_records(raw)


def parse_records(raw: pd.DataFrame) -> tuple[pd.DataFrame, list[DataQualityIssue]]:
    """Coerce numeric columns to float; reject rows with blank keys or numbers that do not parse."""
    df = raw.reset_index(drop=True).copy()
    text = df.copy()
    rejected = pd.Series(False, index=df.index)
    issues: list[DataQualityIssue] = []

    for col in TEXT_COLUMNS:
        df[col] = df[col].fillna("").astype(str).str.strip()

    for col in KEY_COLUMNS:
        bad = (df[col] == "") & ~rejected
        issues.extend(
            DataQualityIssue(row=int(i), column=col, value=_raw_text(text.at[i, col]))
            for i in df.index[bad]
        )
        rejected |= bad

    for col in NUMERIC_COLUMNS:
        values = pd.to_numeric(df[col].astype(str).str.strip(), errors="coerce").astype(float)
        bad = ~np.isfinite(values) & ~rejected
        issues.extend(
            DataQualityIssue(row=int(i), column=col, value=_raw_text(text.at[i, col]))
            for i in df.index[bad]
        )
        rejected |= bad
        df[col] = values

    issues.sort(key=lambda issue: issue.row)
    for issue in issues:
        logger.debug("Rejected row {}: {}={!r} is blank or not a number", issue.row, issue.column, issue.value)
    if issues:
        logger.warning("Rejected {} of {} record(s) with blank keys or malformed numeric fields",
                       len(issues), len(df))

    records = df.loc[~rejected, REQUIRED_COLUMNS].reset_index(drop=True)
    return records, issues


def _raw_text(value) -> str:
    return "" if pd.isna(value) else str(value)


# ── Aggregation ───────────────────────────────────────────────────────────────

def compute_groupings(records: pd.DataFrame) -> Groupings:
    """
    Sum Profit by State, by Category and by (State, Category).

    Key order is first appearance in `records`. Rows with a missing key or a
    non-finite Profit are excluded from every sum.
    """
    if records.empty:
        return Groupings(MappingProxyType({}), MappingProxyType({}), MappingProxyType({}))

    valid = records.dropna(subset=["State", "Category", "Profit"])
    valid = valid[np.isfinite(valid["Profit"].astype(float))]
    dropped = len(records) - len(valid)
    if dropped:
        logger.warning("Excluding {} record(s) with missing profit or grouping keys", dropped)

    by_state = valid.groupby("State", sort=False)["Profit"].sum()
    by_category = valid.groupby("Category", sort=False)["Profit"].sum()
    by_pair = valid.groupby(["State", "Category"], sort=False)["Profit"].sum()

    nested: dict[str, dict[str, float]] = {}
    for (state, category), profit in by_pair.items():
        nested.setdefault(state, {})[category] = float(profit)

    return Groupings(
        by_state=MappingProxyType({k: float(v) for k, v in by_state.items()}),
        by_category=MappingProxyType({k: float(v) for k, v in by_category.items()}),
        by_state_and_category=MappingProxyType(
            {state: MappingProxyType(cats) for state, cats in nested.items()}
        ),
    )


def compute_kpis(records: pd.DataFrame, groupings: Groupings, issues=()) -> dict:
    """Headline numbers for the sidebar snapshot."""
    by_state = groupings.by_state
    return {
        "total_records": len(records),
        "rejected_records": len(issues),
        "total_sales": float(records["Sales"].sum()) if len(records) else 0.0,
        "total_profit": float(sum(by_state.values())),
        "total_states": len(by_state),
        "total_categories": len(groupings.by_category),
        "top_state": max(by_state, key=by_state.get) if by_state else "N/A",
    }


def load_session(path: Path | str | None = None) -> StorySession:
    """Load, parse and aggregate the sales file. Raises DataLoadError on failure."""
    source = Path(path) if path is not None else config.data_path()
    records, issues = load_records(source)
    groupings = compute_groupings(records)
    kpis = compute_kpis(records, groupings, issues)
    logger.info(
        "Loaded {} record(s) from {} ({} rejected, {} states, {} categories)",
        kpis["total_records"], source.name, kpis["rejected_records"],
        kpis["total_states"], kpis["total_categories"],
    )
    return StorySession(
        records=records,
        groupings=groupings,
        issues=tuple(issues),
        source=source,
        kpis=kpis,
    )
