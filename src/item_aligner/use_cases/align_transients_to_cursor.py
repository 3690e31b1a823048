import logging
from typing import Callable

from item_aligner.config import NO_TARGET_MESSAGE, UNDO_LABEL
from item_aligner.domain.project import Project
from item_aligner.domain.selection import SelectionState
from item_aligner.errors import NoTargetError
from item_aligner.services.alignment_engine import AlignmentEngine
from item_aligner.services.placement_resolver import AlignmentReport, PlacementResolver
from item_aligner.services.target_resolver import resolve_targets
from item_aligner.services.undo_history import ProjectHistory

log = logging.getLogger(__name__)


def _log_notification(message: str) -> None:
    log.warning(message)


class AlignTransientsToCursor:
    """
    Use case: align the highest transient of the hovered or selected
    item(s) to the edit cursor, crossfading with whatever they now overlap.

    The whole pass is one undo step, even when some items are skipped.
    """

    def __init__(
        self,
        project: Project,
        history: ProjectHistory | None = None,
        notify: Callable[[str], None] | None = None,
        engine: AlignmentEngine | None = None,
    ):
        self.project = project
        self.history = history or ProjectHistory(project)
        self.notify = notify or _log_notification
        self.engine = engine or AlignmentEngine(project)
        self.resolver = PlacementResolver(project, self.engine)

    def execute(self, selection: SelectionState) -> AlignmentReport:
        self.history.selection = selection
        # Taken before targets are resolved so undo also restores the selection
        before = self.history.capture_state()
        try:
            items, use_track_stacking = resolve_targets(selection)
        except NoTargetError:
            self.notify(NO_TARGET_MESSAGE)
            return AlignmentReport()

        target_time = self.project.cursor_position
        with self.history.transaction(UNDO_LABEL, before):
            if use_track_stacking:
                report = self.resolver.resolve(items, target_time)
            else:
                report = self.resolver.resolve(items[:1], target_time)
        log.info(
            "Aligned %d item(s) to %.6fs, skipped %d",
            len(report.aligned), target_time, len(report.skipped),
        )
        return report
