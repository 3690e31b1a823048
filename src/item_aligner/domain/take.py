from dataclasses import dataclass

from .audio_source import AudioSource

TAKE_KIND_AUDIO = "audio"
TAKE_KIND_MIDI = "midi"


@dataclass(eq=False)
class Take:
    """The media binding currently active on an item."""
    name: str
    source: AudioSource | None = None
    kind: str = TAKE_KIND_AUDIO

    @property
    def is_audio(self) -> bool:
        return self.kind == TAKE_KIND_AUDIO
