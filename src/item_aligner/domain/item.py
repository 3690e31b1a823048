from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from item_aligner.config import DEFAULT_FADE_SHAPE
from .take import Take

if TYPE_CHECKING:
    from .track import Track


@dataclass(eq=False)
class Item:
    """
    A clip placed on a track.
    Position and length are in seconds, timeline-absolute.
    """
    name: str
    position: float
    length: float
    take: Take | None = None
    muted: bool = False
    fade_in_length: float = 0.0
    fade_in_shape: int = DEFAULT_FADE_SHAPE
    fade_out_length: float = 0.0
    fade_out_shape: int = DEFAULT_FADE_SHAPE
    track: Track | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("Item length cannot be negative.")

    @property
    def end(self) -> float:
        return self.position + self.length

    def overlap_with(self, other: Item) -> float:
        """Length of the shared interval, 0.0 when the items don't intersect."""
        if not (self.position < other.end and self.end > other.position):
            return 0.0
        return min(self.end, other.end) - max(self.position, other.position)
