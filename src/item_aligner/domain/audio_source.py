from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

import numpy as np


@dataclass(eq=False)
class AudioSource:
    """
    Immutable reference to decoded audio.
    Samples are stored as float32, one column per channel.
    """
    sample_rate: int
    data: np.ndarray
    file_path: Path | None = None
    _open_accessors: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be greater than zero.")
        arr = np.array(self.data, dtype=np.float32)
        if arr.ndim != 2:
            arr = arr.reshape(-1, 1)
        arr.setflags(write=False)
        self.data = arr

    @property
    def channels(self) -> int:
        return int(self.data.shape[1])

    @property
    def frame_count(self) -> int:
        return int(self.data.shape[0])

    @property
    def duration_seconds(self) -> float:
        """Return the duration of the source in seconds."""
        return self.frame_count / self.sample_rate

    @property
    def open_accessors(self) -> int:
        """Number of accessors currently held on this source."""
        return self._open_accessors

    @contextmanager
    def open_accessor(self) -> Iterator["AudioAccessor"]:
        """Acquire a scoped reader. Released on every exit path."""
        accessor = AudioAccessor(self)
        self._open_accessors += 1
        try:
            yield accessor
        finally:
            accessor.close()
            self._open_accessors -= 1


class AudioAccessor:
    """Reads mono-mixed sample blocks from an AudioSource."""

    def __init__(self, source: AudioSource):
        self._source = source
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    @staticmethod
    def _normalize_to_mono(data: np.ndarray) -> np.ndarray:
        if data.ndim == 1:
            return data
        if data.ndim == 2:
            return data.mean(axis=1)
        return data.flatten()

    def read_samples(self, offset_seconds: float, count: int) -> np.ndarray:
        """
        Read `count` mono samples starting at `offset_seconds`.

        Positions outside the source read as silence, so the result always
        has exactly `count` samples.
        """
        if self._closed:
            raise ValueError("Accessor is closed.")
        out = np.zeros(max(0, count), dtype=np.float32)
        if count <= 0:
            return out

        source = self._source
        start = int(round(offset_seconds * source.sample_rate))
        end = start + count
        src_start = max(start, 0)
        src_end = min(end, source.frame_count)
        if src_end <= src_start:
            return out

        mono = self._normalize_to_mono(source.data[src_start:src_end])
        out[src_start - start : src_end - start] = mono
        return out
