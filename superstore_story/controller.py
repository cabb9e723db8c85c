"""
Scene Controller: a bounded index over the story's scenes.

The controller owns the current index and the active scene component. Every
transition tears the previous scene down completely, builds a fresh component
for the new slot, and dispatches it to the renderer registered for its kind.
Whatever the renderer returns (a Plotly figure in the app) is kept as `view`.
"""
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from loguru import logger

from .data_layer import StorySession
from .exceptions import SceneIndexError
from .scenes import SCENE_FACTORIES, SCENE_ORDER, Scene, SceneKind

Renderer = Callable[[Scene], Any]


@dataclass(frozen=True)
class NavigationState:
    previous_disabled: bool
    next_disabled: bool
    indicator: str


class SceneController:
    def __init__(
        self,
        session: StorySession,
        renderers: Mapping[SceneKind, Renderer],
        order: Sequence[SceneKind] = SCENE_ORDER,
        factories: Mapping[SceneKind, Callable[[StorySession], Scene]] = SCENE_FACTORIES,
    ):
        if not order:
            raise ValueError("A story needs at least one scene")
        missing = [kind.value for kind in order if kind not in renderers or kind not in factories]
        if missing:
            raise ValueError(f"No renderer or factory registered for: {missing}")

        self.session = session
        self._renderers = dict(renderers)
        self._factories = dict(factories)
        self.order = tuple(order)
        self.index = 0
        self.scene: Scene | None = None
        self.view: Any = None
        # Bumped on every scene entry; lets the page key per-visit widgets.
        self.entries = 0

    @property
    def scene_count(self) -> int:
        return len(self.order)

    @property
    def kind(self) -> SceneKind:
        return self.order[self.index]

    @property
    def navigation(self) -> NavigationState:
        return NavigationState(
            previous_disabled=self.index == 0,
            next_disabled=self.index == self.scene_count - 1,
            indicator=f"Scene {self.index + 1} of {self.scene_count}",
        )

    # ── Transitions ───────────────────────────────────────────────────────────

    def start(self) -> Any:
        """Initial entry into the current scene."""
        self._teardown()
        self._enter()
        return self.view

    def next(self) -> bool:
        """Advance one scene. Returns False (and does nothing) at the last scene."""
        if self.index >= self.scene_count - 1:
            return False
        self._move_to(self.index + 1)
        return True

    def previous(self) -> bool:
        """Go back one scene. Returns False (and does nothing) at the first scene."""
        if self.index <= 0:
            return False
        self._move_to(self.index - 1)
        return True

    def go_to(self, index: int) -> bool:
        if not 0 <= index < self.scene_count:
            raise SceneIndexError(index, self.scene_count)
        if index == self.index and self.scene is not None:
            return False
        self._move_to(index)
        return True

    def refresh(self) -> Any:
        """Re-render the active scene in place, keeping its local state."""
        if self.scene is None:
            return self.start()
        self.view = self._render(self.scene)
        return self.view

    # ── Internals ─────────────────────────────────────────────────────────────

    def _move_to(self, index: int) -> None:
        logger.debug("Scene {} -> {}", self.index + 1, index + 1)
        self._teardown()
        self.index = index
        self._enter()

    def _teardown(self) -> None:
        self.scene = None
        self.view = None

    def _enter(self) -> None:
        self.scene = self._factories[self.kind](self.session)
        self.entries += 1
        self.view = self._render(self.scene)

    def _render(self, scene: Scene) -> Any:
        return self._renderers[self.kind](scene)
