import logging
from contextlib import contextmanager
from typing import Iterator

from item_aligner.config import MAX_UNDO_HISTORY
from item_aligner.domain.project import Project
from item_aligner.domain.selection import SelectionState

log = logging.getLogger(__name__)

_ITEM_FIELDS = (
    "position",
    "length",
    "muted",
    "fade_in_length",
    "fade_in_shape",
    "fade_out_length",
    "fade_out_shape",
)


class ProjectHistory:
    """
    Snapshot based undo/redo for a project.

    Snapshots keep references to the live Track and Item objects so that
    restoring puts the same objects back where they were. Each snapshot
    also remembers the SelectionState it was taken from.
    """

    def __init__(
        self,
        project: Project,
        selection: SelectionState | None = None,
        max_history: int = MAX_UNDO_HISTORY,
    ):
        self.project = project
        self.selection = selection
        self.max_history = max_history
        self.undo_stack: list[tuple[str, dict]] = []
        self.redo_stack: list[tuple[str, dict]] = []

    def capture_state(self, selection: SelectionState | None = None) -> dict:
        if selection is None:
            selection = self.selection
        tracks_state = []
        items_state = []
        for track in self.project.get_tracks():
            tracks_state.append(
                {
                    "track": track,
                    "index": track.index,
                    "name": track.name,
                    "muted": track.muted,
                    "items": list(track.items),
                }
            )
            for item in track.items:
                items_state.append(
                    (item, {name: getattr(item, name) for name in _ITEM_FIELDS})
                )

        state = {"tracks": tracks_state, "items": items_state}
        if selection is not None:
            state["selection"] = selection
            state["selected"] = list(selection.selected)
        return state

    def restore_state(self, state: dict) -> None:
        kept = {id(entry["track"]) for entry in state["tracks"]}
        for track in self.project.get_tracks():
            self.project.remove_track(track)
            if id(track) not in kept:
                track.items = []

        for entry in state["tracks"]:
            track = entry["track"]
            track.name = entry["name"]
            track.muted = entry["muted"]
            track.items = list(entry["items"])
            for item in track.items:
                item.track = track
            self.project.insert_track_at(entry["index"], track)

        for item, values in state["items"]:
            for name, value in values.items():
                setattr(item, name, value)

        if "selection" in state:
            state["selection"].selected = list(state["selected"])

    def push_undo_state(self, label: str, state: dict | None = None) -> None:
        if state is None:
            state = self.capture_state()
        self.undo_stack.append((label, state))
        if len(self.undo_stack) > self.max_history:
            self.undo_stack.pop(0)
        self.redo_stack.clear()

    @contextmanager
    def transaction(self, label: str, state: dict | None = None) -> Iterator[None]:
        """
        Record one undo step covering everything done inside the block.

        `state` lets the caller supply a snapshot taken earlier.
        """
        self.push_undo_state(label, state)
        yield
        log.debug("Recorded undo step %r", label)

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        label, state = self.undo_stack.pop()
        self.redo_stack.append((label, self.capture_state(state.get("selection"))))
        self.restore_state(state)
        log.info("Undo: %s", label)
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        label, state = self.redo_stack.pop()
        self.undo_stack.append((label, self.capture_state(state.get("selection"))))
        self.restore_state(state)
        log.info("Redo: %s", label)
        return True
