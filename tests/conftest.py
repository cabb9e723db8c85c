"""Shared fixtures for the profit story tests."""

import pandas as pd
import pytest
from loguru import logger

from superstore_story.data_layer import StorySession, compute_groupings, parse_records

CSV_HEADER = "State,Category,Product Name,Sales,Quantity,Discount,Profit\n"


def _row(state, category, profit, name="Widget", sales=100.0, quantity=1, discount=0.0):
    return {
        "State": state,
        "Category": category,
        "Product Name": name,
        "Sales": sales,
        "Quantity": quantity,
        "Discount": discount,
        "Profit": profit,
    }


def make_session(raw: pd.DataFrame) -> StorySession:
    records, issues = parse_records(raw)
    return StorySession(records=records, groupings=compute_groupings(records), issues=tuple(issues))


@pytest.fixture()
def example_raw() -> pd.DataFrame:
    """Three order lines: TX Tech +100, TX Furn -20, CA Tech +50."""
    return pd.DataFrame([
        _row("TX", "Tech", 100, name="Laptop", discount=0.0),
        _row("TX", "Furn", -20, name="Desk", discount=0.4),
        _row("CA", "Tech", 50, name="Phone", discount=0.2),
    ])


@pytest.fixture()
def example_session(example_raw) -> StorySession:
    return make_session(example_raw)


@pytest.fixture()
def superstore_raw() -> pd.DataFrame:
    """A small multi-state dataset with the real category names."""
    return pd.DataFrame([
        _row("Texas", "Technology", 134.77, name="Samsung Galaxy Mega", discount=0.2),
        _row("Texas", "Office Supplies", -123.86, name="Holmes HEPA Filter", discount=0.8),
        _row("California", "Furniture", 14.17, name="Eldon Desk Accessories"),
        _row("California", "Technology", 90.72, name="Mitel IP Phone", discount=0.2),
        _row("California", "Office Supplies", 34.47, name="Belkin Surge"),
        _row("Pennsylvania", "Furniture", -1665.05, name="Riverside Bookcase", discount=0.5),
        _row("Pennsylvania", "Technology", -12.42, name="Panasonic Kx-TS550", discount=0.4),
        _row("Kentucky", "Furniture", 219.58, name="Hon Stacking Chairs"),
    ])


@pytest.fixture()
def superstore_session(superstore_raw) -> StorySession:
    return make_session(superstore_raw)


@pytest.fixture()
def empty_session() -> StorySession:
    return make_session(pd.DataFrame(columns=list(_row("", "", 0).keys())))


@pytest.fixture()
def sales_csv(tmp_path):
    p = tmp_path / "superstore.csv"
    p.write_text(
        CSV_HEADER
        + "TX,Tech,Laptop,900,3,0,100\n"
        + "TX,Furn,Desk,300,1,0.4,-20\n"
        + 'CA,Tech,"Phone, Black",250,2,0.2,50\n'
    )
    return p


@pytest.fixture()
def log_messages():
    """Capture loguru output as a list of formatted lines."""
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{level} | {message}")
    yield messages
    logger.remove(sink_id)
