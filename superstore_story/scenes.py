"""
Scenes: the three steps of the profit story as small, disposable components.

A scene component is built fresh each time the story enters its slot and is
thrown away when the story leaves it, so per-scene state (the state selector's
current choice) never outlives the visit.

  SceneKind.STATE_SELECTOR      : profit by category for one chosen state
  SceneKind.NATIONWIDE_CATEGORY : total profit by category
  SceneKind.DISCOUNT_PROFIT     : one point per order line, discount vs profit
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import pandas as pd

from .data_layer import StorySession
from .exceptions import UnknownStateError


class SceneKind(Enum):
    STATE_SELECTOR = "state_selector"
    NATIONWIDE_CATEGORY = "nationwide_category"
    DISCOUNT_PROFIT = "discount_profit"


SCENE_ORDER: tuple[SceneKind, ...] = (
    SceneKind.STATE_SELECTOR,
    SceneKind.NATIONWIDE_CATEGORY,
    SceneKind.DISCOUNT_PROFIT,
)

# Scatter colours, assigned to categories in first-seen order and reused cyclically.
CATEGORY_PALETTE = ("#4682b4", "#da70d6", "#f08080")


@dataclass(frozen=True)
class Highlight:
    """A data-derived callout on one bar of the state selector chart."""
    kind: str  # "highest" | "loss"
    category: str
    value: float
    title: str
    label: str


@dataclass(frozen=True)
class Callout:
    """A fixed textual callout pinned at data coordinates."""
    title: str
    label: str
    x: str | float
    y: float


def category_palette(categories: Iterable[str]) -> dict[str, str]:
    """Map each distinct category (first-seen order) onto CATEGORY_PALETTE."""
    palette: dict[str, str] = {}
    for cat in categories:
        if cat not in palette:
            palette[cat] = CATEGORY_PALETTE[len(palette) % len(CATEGORY_PALETTE)]
    return palette


def derive_highlights(category_profits: list[tuple[str, float]]) -> list[Highlight]:
    """
    Rank categories by profit (stable, descending) and pick the callouts.

    The top entry is always the "highest profit" highlight. The bottom entry is
    also flagged as a "major loss" when its profit is strictly negative; with a
    single negative category both highlights land on the same bar.
    """
    if not category_profits:
        return []

    ranked = sorted(category_profits, key=lambda item: item[1], reverse=True)
    top_cat, top_val = ranked[0]
    highlights = [Highlight(
        kind="highest",
        category=top_cat,
        value=top_val,
        title=f"Highest Profit: {top_cat}",
        label=f"Highest profit: ${top_val:.2f}",
    )]

    low_cat, low_val = ranked[-1]
    if low_val < 0:
        highlights.append(Highlight(
            kind="loss",
            category=low_cat,
            value=low_val,
            title=f"Major Loss: {low_cat}",
            label=f"Lowest profit: ${low_val:.2f}",
        ))
    return highlights


# ── Scene components ──────────────────────────────────────────────────────────

class StateSelectorScene:
    """Scene 1: a state dropdown driving a profit-by-category bar chart."""

    kind = SceneKind.STATE_SELECTOR

    def __init__(self, session: StorySession):
        self.session = session
        self.options: list[str] = session.groupings.states()
        self.selected_state: str | None = self.options[0] if self.options else None

    def select(self, state: str) -> None:
        if state not in self.options:
            raise UnknownStateError(state)
        self.selected_state = state

    def category_profits(self) -> list[tuple[str, float]]:
        if self.selected_state is None:
            return []
        return self.session.groupings.categories_for(self.selected_state)

    def highlights(self) -> list[Highlight]:
        return derive_highlights(self.category_profits())

    @property
    def title(self) -> str:
        if self.selected_state is None:
            return "Profit by Category"
        return f"Profit by Category in {self.selected_state}"


class NationwideCategoryScene:
    """Scene 2: total profit per category across every state."""

    kind = SceneKind.NATIONWIDE_CATEGORY
    title = "Nation Wide Total Profit by Category"

    _CALLOUTS = (
        ("Technology", "Highest Profit", "Technology contributes the most to overall profit."),
        ("Furniture", "Lower Profit", "Furniture has a much lower profit margin."),
    )

    def __init__(self, session: StorySession):
        self.session = session

    def bars(self) -> list[tuple[str, float]]:
        return list(self.session.groupings.by_category.items())

    def callouts(self) -> list[Callout]:
        by_category = self.session.groupings.by_category
        return [
            Callout(title=title, label=label, x=cat, y=by_category[cat])
            for cat, title, label in self._CALLOUTS
            if cat in by_category
        ]


class DiscountProfitScene:
    """Scene 3: every order line plotted as discount vs profit."""

    kind = SceneKind.DISCOUNT_PROFIT
    title = "Profit vs. Discount Analysis"

    _CALLOUTS = (
        Callout(title="Discount Impact",
                label="High discounts often lead to significant losses.",
                x=0.5, y=-1000),
        Callout(title="Zero Discount Sales",
                label="The majority of sales occur with no discount.",
                x=0.02, y=400),
    )

    def __init__(self, session: StorySession):
        self.session = session
        self.palette = category_palette(session.records["Category"]) if len(session.records) else {}

    def points(self) -> pd.DataFrame:
        return self.session.records

    def callouts(self) -> list[Callout]:
        return list(self._CALLOUTS)

    @staticmethod
    def tooltip(row) -> str:
        return (
            f"Product: {row['Product Name']}<br>"
            f"Category: {row['Category']}<br>"
            f"Profit: ${row['Profit']:.2f}<br>"
            f"Discount: {row['Discount'] * 100:g}%"
        )


Scene = StateSelectorScene | NationwideCategoryScene | DiscountProfitScene

SCENE_FACTORIES: dict[SceneKind, Callable[[StorySession], Scene]] = {
    SceneKind.STATE_SELECTOR: StateSelectorScene,
    SceneKind.NATIONWIDE_CATEGORY: NationwideCategoryScene,
    SceneKind.DISCOUNT_PROFIT: DiscountProfitScene,
}
