import logging

from item_aligner.config import EQUAL_POWER_FADE_SHAPE
from item_aligner.domain.item import Item

log = logging.getLogger(__name__)


class CrossfadeSynthesizer:
    """
    Extends fades so that overlapping items on one track crossfade.

    Fades only ever grow: an existing fade at least as long as the overlap
    is left alone, shape included.
    """

    def __init__(self, fade_shape: int = EQUAL_POWER_FADE_SHAPE):
        self.fade_shape = fade_shape

    @staticmethod
    def _needs_extension(existing: float, overlap: float) -> bool:
        return existing == 0 or existing < overlap

    def _shape_or_default(self, shape: int) -> int:
        return shape if shape > 0 else self.fade_shape

    def _extend_fade_out(self, item: Item, overlap: float) -> None:
        if self._needs_extension(item.fade_out_length, overlap):
            item.fade_out_length = overlap
            item.fade_out_shape = self._shape_or_default(item.fade_out_shape)

    def _extend_fade_in(self, item: Item, overlap: float) -> None:
        if self._needs_extension(item.fade_in_length, overlap):
            item.fade_in_length = overlap
            item.fade_in_shape = self._shape_or_default(item.fade_in_shape)

    def repair_overlaps(self, item: Item) -> int:
        """
        Crossfade `item` with every item it overlaps on its track.

        Returns the number of overlapping neighbours found.
        """
        track = item.track
        if track is None:
            return 0

        found = 0
        for other in track.get_items():
            if other is item:
                continue
            overlap = item.overlap_with(other)
            if overlap <= 0:
                continue
            found += 1

            if item.position < other.position:
                left, right = item, other
            else:
                left, right = other, item
            self._extend_fade_out(left, overlap)
            self._extend_fade_in(right, overlap)
            log.debug(
                "Crossfade %s -> %s over %.4fs on track %s",
                left.name, right.name, overlap, track.name,
            )
        return found
