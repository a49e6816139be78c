"""
Visit State - The visitor's session inside one preview.

Design principles:
- Immutable: every change returns a new VisitSession
- Owned by exactly one preview; never shared or persisted
- Points never decrease during a session
"""

from __future__ import annotations
from dataclasses import dataclass, field

HOMESCREEN_INDEX = -1


@dataclass(frozen=True)
class View:
    """
    What the visitor is looking at.

    Either the homescreen or a location, identified by its index into the
    loaded (id-ordered) location sequence.
    """
    index: int = HOMESCREEN_INDEX

    @classmethod
    def homescreen(cls) -> View:
        return cls(HOMESCREEN_INDEX)

    @classmethod
    def at_location(cls, index: int) -> View:
        if index < 0:
            raise ValueError(f"Location index must be non-negative, got {index}")
        return cls(index)

    @property
    def is_homescreen(self) -> bool:
        return self.index == HOMESCREEN_INDEX

    def __str__(self) -> str:
        return "Homescreen" if self.is_homescreen else f"AtLocation({self.index})"


@dataclass(frozen=True)
class VisitSession:
    """
    Complete visit state at a point in time.

    All changes go through the reducer.
    """
    view: View = field(default_factory=View.homescreen)
    visited_ids: frozenset[int] = frozenset()
    points: int = 0

    @property
    def current_index(self) -> int:
        return self.view.index

    def has_visited(self, location_id: int) -> bool:
        return location_id in self.visited_ids

    def _copy_with(self, **kwargs) -> VisitSession:
        """Create a copy with some fields replaced."""
        return VisitSession(
            view=kwargs.get("view", self.view),
            visited_ids=kwargs.get("visited_ids", self.visited_ids),
            points=kwargs.get("points", self.points),
        )

    def with_view(self, view: View) -> VisitSession:
        return self._copy_with(view=view)

    def with_visit(self, location_id: int, awarded: int) -> VisitSession:
        """Return new session with the location marked visited and points added."""
        return self._copy_with(
            visited_ids=self.visited_ids | {location_id},
            points=self.points + awarded,
        )

    def with_points(self, awarded: int) -> VisitSession:
        return self._copy_with(points=self.points + awarded)
