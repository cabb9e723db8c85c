"""Exception hierarchy for the profit story."""


class StoryError(Exception):
    """Base exception for all superstore_story errors."""


class DataLoadError(StoryError):
    """The sales file is missing, unreadable, or cannot be parsed."""


class ColumnMismatchError(DataLoadError):
    """Required columns missing from the sales file."""

    def __init__(self, missing: set[str], available: set[str]) -> None:
        self.missing = missing
        self.available = available
        super().__init__(f"Missing required columns: {sorted(missing)}")


class SceneIndexError(StoryError, IndexError):
    """A scene jump outside the story's bounds."""

    def __init__(self, index: int, scene_count: int) -> None:
        self.index = index
        self.scene_count = scene_count
        super().__init__(f"Scene index {index} outside 0..{scene_count - 1}")


class UnknownStateError(StoryError, KeyError):
    """A state-selector choice that is not among the available states."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(state)

    def __str__(self) -> str:
        return f"Unknown state: {self.state!r}"
