import logging
from dataclasses import dataclass, field

from item_aligner.domain.item import Item
from item_aligner.domain.project import Project
from item_aligner.domain.track import Track
from item_aligner.errors import AlignmentError, TrackAllocationError
from item_aligner.services.alignment_engine import AlignmentEngine

log = logging.getLogger(__name__)


@dataclass
class AlignmentReport:
    """Outcome of one alignment pass."""
    aligned: list[Item] = field(default_factory=list)
    skipped: list[tuple[Item, str]] = field(default_factory=list)
    created_tracks: list[Track] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.aligned or self.skipped)


class PlacementResolver:
    """
    Aligns a batch of items to one instant.

    Items spread over several tracks are aligned where they are. Items that
    all share one track are stacked: the leftmost stays, each following one
    moves to the next track down, created on demand.
    """

    def __init__(self, project: Project, engine: AlignmentEngine):
        self.project = project
        self.engine = engine

    def resolve(self, items: list[Item], target_time: float) -> AlignmentReport:
        report = AlignmentReport()
        if not items:
            return report

        if len(items) < 2:
            self._align(items[0], target_time, None, report)
            return report

        origin = items[0].track
        same_track = (
            origin is not None
            and origin.index is not None
            and all(item.track is origin for item in items)
        )

        if not same_track:
            for item in items:
                self._align(item, target_time, None, report)
            return report

        # sorted() is stable, equal positions keep selection order
        ordered = sorted(items, key=lambda item: item.position)
        origin_index = origin.index
        for k, item in enumerate(ordered):
            if k == 0:
                self._align(item, target_time, None, report)
                continue
            try:
                destination = self._destination_track(origin_index + k, report)
            except TrackAllocationError as exc:
                log.warning("Skipping %s: %s", item.name, exc)
                report.skipped.append((item, str(exc)))
                continue
            self._align(item, target_time, destination, report)
        return report

    def _destination_track(self, index: int, report: AlignmentReport) -> Track:
        track = self.project.track_at(index)
        if track is not None:
            return track
        try:
            track = self.project.create_track_at(index)
        except ValueError as exc:
            raise TrackAllocationError(f"Cannot create track at index {index}: {exc}") from exc
        log.debug("Created track %s at index %d", track.name, index)
        report.created_tracks.append(track)
        return track

    def _align(
        self,
        item: Item,
        target_time: float,
        destination: Track | None,
        report: AlignmentReport,
    ) -> None:
        try:
            self.engine.align_to_instant(item, target_time, destination)
        except AlignmentError as exc:
            log.warning("Skipping %s: %s", item.name, exc)
            report.skipped.append((item, str(exc)))
        else:
            report.aligned.append(item)
