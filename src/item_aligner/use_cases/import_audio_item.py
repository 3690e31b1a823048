from pathlib import Path

from item_aligner.domain.item import Item
from item_aligner.domain.project import Project
from item_aligner.domain.take import Take
from item_aligner.domain.track import Track
from item_aligner.services.wav_reader import read_wav_file


class ImportAudioItem:
    """Use case for placing a WAV file on a track as a new item."""

    def __init__(self, project: Project):
        self.project = project

    def execute(self, file_path: str | Path, track: Track, position: float) -> Item:
        if track not in self.project.get_tracks():
            raise ValueError(f"Track {track.name} not found in project.")
        source = read_wav_file(file_path)
        path = Path(file_path)
        item = Item(
            name=path.stem,
            position=position,
            length=source.duration_seconds,
            take=Take(name=path.name, source=source),
        )
        track.add_item(item)
        return item
