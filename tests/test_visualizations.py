"""Tests for the Plotly scene figures."""

import plotly.graph_objects as go
import pytest

from superstore_story.scenes import (
    DiscountProfitScene,
    NationwideCategoryScene,
    SceneKind,
    StateSelectorScene,
)
from superstore_story.visualizations import (
    COLORS,
    RENDERERS,
    category_chart,
    discount_chart,
    state_category_chart,
)


class TestStateCategoryChart:
    def test_default_state_bars(self, superstore_session):
        fig = state_category_chart(StateSelectorScene(superstore_session))
        assert isinstance(fig, go.Figure)
        bar = fig.data[0]
        assert list(bar.x) == ["Furniture", "Technology", "Office Supplies"]
        assert fig.layout.title.text == "Profit by Category in California"
        assert len(fig.layout.annotations) == 1
        assert "Highest Profit: Technology" in fig.layout.annotations[0].text

    def test_loss_state_colours_and_callouts(self, superstore_session):
        scene = StateSelectorScene(superstore_session)
        scene.select("Pennsylvania")
        fig = state_category_chart(scene)
        assert list(fig.data[0].marker.color) == [COLORS["negative"], COLORS["negative"]]
        texts = [a.text for a in fig.layout.annotations]
        assert any("Highest Profit: Technology" in t for t in texts)
        assert any("Major Loss: Furniture" in t for t in texts)

    def test_y_range_includes_zero(self, superstore_session):
        fig = state_category_chart(StateSelectorScene(superstore_session))
        assert fig.layout.yaxis.rangemode == "tozero"

    def test_placeholder_when_no_states(self, empty_session):
        fig = state_category_chart(StateSelectorScene(empty_session))
        assert len(fig.data) == 0
        assert fig.layout.annotations[0].text == "No data for this state"


class TestCategoryChart:
    def test_bars_and_callouts(self, superstore_session):
        fig = category_chart(NationwideCategoryScene(superstore_session))
        assert list(fig.data[0].x) == ["Technology", "Office Supplies", "Furniture"]
        assert len(fig.layout.annotations) == 2
        assert fig.layout.yaxis.rangemode == "tozero"
        assert fig.layout.title.text == "Nation Wide Total Profit by Category"

    def test_placeholder_when_empty(self, empty_session):
        fig = category_chart(NationwideCategoryScene(empty_session))
        assert len(fig.data) == 0


class TestDiscountChart:
    def test_one_trace_per_category_plus_callout_rings(self, superstore_session):
        fig = discount_chart(DiscountProfitScene(superstore_session))
        names = [t.name for t in fig.data]
        assert names == ["Technology", "Office Supplies", "Furniture", "callouts"]
        assert sum(len(t.x) for t in fig.data[:-1]) == len(superstore_session.records)
        assert len(fig.layout.annotations) == 2

    def test_hover_text_per_point(self, superstore_session):
        fig = discount_chart(DiscountProfitScene(superstore_session))
        assert fig.data[0].hovertext[0].startswith("Product: Samsung Galaxy Mega<br>")

    def test_marker_colours_from_palette(self, superstore_session):
        scene = DiscountProfitScene(superstore_session)
        fig = discount_chart(scene)
        for trace in fig.data[:-1]:
            assert trace.marker.color == scene.palette[trace.name]

    def test_placeholder_when_empty(self, empty_session):
        fig = discount_chart(DiscountProfitScene(empty_session))
        assert fig.layout.annotations[0].text == "No records to plot"


class TestLayout:
    def test_renderers_cover_every_scene(self):
        assert set(RENDERERS) == set(SceneKind)

    def test_chart_size_from_env(self, superstore_session, monkeypatch):
        monkeypatch.setenv("STORY_CHART_WIDTH", "800")
        monkeypatch.setenv("STORY_CHART_HEIGHT", "500")
        fig = category_chart(NationwideCategoryScene(superstore_session))
        assert fig.layout.width == 800
        assert fig.layout.height == 500

    @pytest.mark.parametrize("kind", list(SceneKind))
    def test_default_size(self, kind, superstore_session, monkeypatch):
        monkeypatch.delenv("STORY_CHART_WIDTH", raising=False)
        monkeypatch.delenv("STORY_CHART_HEIGHT", raising=False)
        from superstore_story.scenes import SCENE_FACTORIES

        fig = RENDERERS[kind](SCENE_FACTORIES[kind](superstore_session))
        assert (fig.layout.width, fig.layout.height) == (960, 600)
