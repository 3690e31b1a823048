import numpy as np
import pytest

from item_aligner.domain.audio_source import AudioSource
from item_aligner.domain.item import Item
from item_aligner.domain.project import Project
from item_aligner.domain.take import Take

SAMPLE_RATE = 1000


def make_source(duration_seconds: float = 1.0, peak_at: float | None = None,
                peak: float = 0.9, sample_rate: int = SAMPLE_RATE) -> AudioSource:
    data = np.zeros(int(round(duration_seconds * sample_rate)), dtype=np.float32)
    if peak_at is not None:
        data[int(round(peak_at * sample_rate))] = peak
    return AudioSource(sample_rate=sample_rate, data=data)


def make_item(name: str = "item", position: float = 0.0, peak_at: float | None = 0.25,
              duration_seconds: float = 1.0, **fields) -> Item:
    source = make_source(duration_seconds, peak_at)
    return Item(
        name=name,
        position=position,
        length=duration_seconds,
        take=Take(name=f"{name}.wav", source=source),
        **fields,
    )


@pytest.fixture
def project():
    return Project("Test Project")
