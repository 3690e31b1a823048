from typing import List

from .item import Item
from .track import Track


class Project:
    """
    Represents a project: tracks keyed by index plus the edit cursor.

    Track indices form a sparse ordered map, so a track can be created at
    an index past the current last one without filling the gap.
    """

    def __init__(self, name: str, cursor_position: float = 0.0):
        self.name = name
        self.cursor_position = cursor_position
        self._tracks: dict[int, Track] = {}

    def add_track(self, track: Track) -> Track:
        """Append `track` after the highest used index."""
        index = max(self._tracks, default=-1) + 1
        return self.insert_track_at(index, track)

    def insert_track_at(self, index: int, track: Track) -> Track:
        if index < 0:
            raise ValueError(f"Track index must be non-negative, got {index}.")
        if index in self._tracks:
            raise ValueError(f"Track index {index} is already in use.")
        if track.index is not None and self._tracks.get(track.index) is track:
            raise ValueError(f"Track {track.name} is already in the project.")
        self._tracks[index] = track
        track.index = index
        return track

    def create_track_at(self, index: int, name: str | None = None) -> Track:
        return self.insert_track_at(index, Track(name=name or f"Track {index + 1}"))

    def remove_track(self, track: Track) -> None:
        if self._tracks.get(track.index) is not track:
            raise ValueError(f"Track {track.name} not found in project.")
        del self._tracks[track.index]
        track.index = None

    def track_at(self, index: int) -> Track | None:
        return self._tracks.get(index)

    def get_tracks(self) -> List[Track]:
        return [self._tracks[i] for i in sorted(self._tracks)]

    def track_count(self) -> int:
        return len(self._tracks)

    def get_items(self) -> List[Item]:
        return [item for track in self.get_tracks() for item in track.items]

    def move_item_to_track(self, item: Item, track: Track) -> None:
        if self._tracks.get(track.index) is not track:
            raise ValueError(f"Track {track.name} not found in project.")
        track.add_item(item)
