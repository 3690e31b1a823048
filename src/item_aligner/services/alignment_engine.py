import logging
from contextlib import contextmanager
from typing import Iterator

from item_aligner.domain.item import Item
from item_aligner.domain.project import Project
from item_aligner.domain.track import Track
from item_aligner.errors import (
    MissingAudioSourceError,
    TrackAllocationError,
    UnsupportedTakeError,
)
from item_aligner.services.crossfade_synthesizer import CrossfadeSynthesizer
from item_aligner.services.sample_scanner import SampleScanner

log = logging.getLogger(__name__)


@contextmanager
def unmuted_for_analysis(item: Item) -> Iterator[None]:
    """
    Clear the item and track mute flags for the duration of the block.

    Both flags are put back on exit, including when the block raises. The
    track restored is the one the item sat on when the block was entered.
    """
    track = item.track
    item_was_muted = item.muted
    track_was_muted = track.muted if track is not None else False

    if track_was_muted:
        track.muted = False
    if item_was_muted:
        item.muted = False
    try:
        yield
    finally:
        if track is not None:
            track.muted = track_was_muted
        item.muted = item_was_muted


class AlignmentEngine:
    """Moves an item so that its loudest sample lands on a target instant."""

    def __init__(
        self,
        project: Project,
        scanner: SampleScanner | None = None,
        crossfader: CrossfadeSynthesizer | None = None,
    ):
        self.project = project
        self.scanner = scanner or SampleScanner()
        self.crossfader = crossfader or CrossfadeSynthesizer()

    def align_to_instant(
        self,
        item: Item,
        target_time: float,
        destination_track: Track | None = None,
    ) -> float:
        """
        Align the peak of `item` to `target_time` and return its new position.

        Raises UnsupportedTakeError / MissingAudioSourceError for items
        without audio; mute flags are untouched in that case too. A
        destination outside the project raises TrackAllocationError and
        leaves the item where it was.
        """
        if destination_track is not None and (
            destination_track.index is None
            or self.project.track_at(destination_track.index) is not destination_track
        ):
            raise TrackAllocationError(
                f"Track {destination_track.name} is not part of the project."
            )

        with unmuted_for_analysis(item):
            take = item.take
            if take is None or not take.is_audio:
                raise UnsupportedTakeError(f"Item {item.name} has no audio take.")
            if take.source is None:
                raise MissingAudioSourceError(f"Item {item.name} has no audio source.")

            peak_offset = self.scanner.find_peak_offset(take)
            # No clamping: items may start before the timeline origin
            item.position = target_time - peak_offset

            if destination_track is not None and destination_track is not item.track:
                self.project.move_item_to_track(item, destination_track)

        log.debug(
            "Aligned %s: peak %.6fs, position %.6fs, track %s",
            item.name, peak_offset, item.position,
            item.track.name if item.track is not None else None,
        )
        self.crossfader.repair_overlaps(item)
        return item.position
