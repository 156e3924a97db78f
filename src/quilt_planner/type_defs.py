"""
Defines shared types for the quilt planner.

Centralizes the value objects that flow between the layout modules:
input items, transient candidates, committed placements and the plan.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal, overload

Orientation = Literal["portrait", "landscape", "square"]
PackingStrategy = Literal["skyline", "row"]


@dataclass(frozen=True, slots=True)
class QuiltItem:
    """One input image. Zero or missing dimensions mean unknown."""

    src: str
    width: float | None = None
    height: float | None = None
    explicit_rows: int | None = None
    explicit_cols: int | None = None
    title: str | None = None
    alt: str | None = None

    @property
    def has_explicit_spans(self) -> bool:
        """Return True when both explicit spans are set and positive."""
        return bool(self.explicit_rows) and bool(self.explicit_cols)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A footprint proposed for one item during scoring."""

    rows: int
    cols: int
    is_hero: bool = False


@dataclass(frozen=True, slots=True)
class Placement:
    """Committed footprint and grid position of one item."""

    item_index: int
    rows: int
    cols: int
    x: int
    y: int
    is_hero: bool = False
    row_index: int = 0

    @property
    def x_end(self) -> int:
        """Exclusive right column."""
        return self.x + self.cols

    @property
    def y_end(self) -> int:
        """Exclusive bottom row."""
        return self.y + self.rows

    @property
    def area(self) -> int:
        """Number of grid cells covered."""
        return self.rows * self.cols


@dataclass(frozen=True, slots=True)
class Plan(Sequence[Placement]):
    """
    Ordered placements, one per input item.

    Behaves as a read-only sequence. Consumers map tiles back to their
    items through ``Placement.item_index``, not through position.
    """

    placements: tuple[Placement, ...] = ()
    num_cols: int = 1
    heroes_requested: int = 0

    @overload
    def __getitem__(self, index: int) -> Placement: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Placement, ...]: ...

    def __getitem__(
        self,
        index: int | slice,
    ) -> Placement | tuple[Placement, ...]:
        return self.placements[index]

    def __len__(self) -> int:
        return len(self.placements)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.placements)

    @property
    def hero_count(self) -> int:
        """Number of hero placements."""
        return sum(1 for p in self.placements if p.is_hero)

    @property
    def heroes_shortfall(self) -> int:
        """Heroes still missing from the configured minimum."""
        return max(0, self.heroes_requested - self.hero_count)

    @property
    def height(self) -> int:
        """Grid rows used by the plan."""
        return max((p.y_end for p in self.placements), default=0)

    def by_item(self) -> dict[int, Placement]:
        """Map each item index to its placement."""
        return {p.item_index: p for p in self.placements}


@dataclass(slots=True)
class PlanSummary:
    """Aggregate figures logged after a planning pass."""

    items: int
    heroes: int
    height: int
    shortfall: int = 0
    strategy: PackingStrategy = "skyline"
    notes: list[str] = field(default_factory=list)
