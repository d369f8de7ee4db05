# src/radar_spine/models.py

"""
Radar domain model.

Normalized rows flow in from the sanitizer; the builder folds them into a
Radar made of Quadrants (each owning its Blips) and at most four Rings shared
by reference.
"""

from dataclasses import dataclass, field


MAX_RINGS = 4


# =============================================================================
# NORMALIZED DATA (one per input row, after sanitization)
# =============================================================================


@dataclass(frozen=True)
class NormalizedBlip:
    """
    One sanitized input row.

    quadrant and ring are kept exactly as seen (trimmed); case handling
    happens in the builder.
    """

    name: str
    quadrant: str
    ring: str
    is_new: bool
    topic: str
    description: str


# =============================================================================
# RADAR MODEL
# =============================================================================


@dataclass(frozen=True)
class Ring:
    """A maturity tier. order is 0..MAX_RINGS-1, by first appearance."""

    name: str
    order: int

    def __post_init__(self):
        if not 0 <= self.order < MAX_RINGS:
            raise ValueError(f"Ring order must be in [0, {MAX_RINGS - 1}], got {self.order}")


@dataclass(frozen=True)
class Blip:
    """One assessed item. Holds a shared reference to its Ring."""

    name: str
    ring: Ring
    is_new: bool
    topic: str = ""
    description: str = ""


@dataclass
class Quadrant:
    """A top-level category. Blips are only ever appended."""

    name: str
    blips: list[Blip] = field(default_factory=list)

    def add(self, blip: Blip) -> None:
        self.blips.append(blip)


@dataclass(frozen=True)
class Radar:
    """
    Aggregate root handed to the rendering collaborator.

    quadrants keep the order in which each quadrant was first referenced;
    rings are ordered by Ring.order.
    """

    quadrants: tuple[Quadrant, ...]
    rings: tuple[Ring, ...]
    current_sheet_name: str
    alternative_sheets: tuple[str, ...] = ()

    @property
    def blip_count(self) -> int:
        return sum(len(q.blips) for q in self.quadrants)

    def quadrant(self, name: str) -> Quadrant | None:
        """Look up a quadrant by name, case-insensitively."""
        for quadrant in self.quadrants:
            if quadrant.name.lower() == name.strip().lower():
                return quadrant
        return None
