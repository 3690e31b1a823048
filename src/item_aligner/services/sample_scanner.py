import logging
from typing import Iterator

import numpy as np

from item_aligner.config import BLOCK_SIZE
from item_aligner.domain.take import Take
from item_aligner.errors import MissingAudioSourceError, UnsupportedTakeError

log = logging.getLogger(__name__)


class SampleScanner:
    """
    Streams mono sample blocks from a take's source and locates the peak.

    Every iteration opens its own accessor, so a scan can be restarted and
    nothing is cached between takes.
    """

    def __init__(self, block_size: int = BLOCK_SIZE):
        if block_size <= 0:
            raise ValueError("Block size must be greater than zero.")
        self.block_size = block_size

    @staticmethod
    def _require_audio(take: Take | None):
        if take is None or not take.is_audio:
            raise UnsupportedTakeError("Take does not carry audio.")
        if take.source is None:
            raise MissingAudioSourceError(f"Take {take.name} has no audio source.")
        return take.source

    def iter_blocks(self, take: Take) -> Iterator[tuple[float, np.ndarray]]:
        """
        Yield (block_start_seconds, absolute_amplitudes) over [0, duration).

        The accessor is held only while the generator is running and is
        released when it finishes or is closed early.
        """
        source = self._require_audio(take)
        sample_rate = source.sample_rate
        duration = source.duration_seconds

        with source.open_accessor() as accessor:
            block_index = 0
            while True:
                block_start = block_index * self.block_size / sample_rate
                if block_start >= duration:
                    break
                samples = accessor.read_samples(block_start, self.block_size)
                yield block_start, np.abs(samples)
                block_index += 1

    def iter_amplitudes(self, take: Take) -> Iterator[tuple[float, float]]:
        """Yield (offset_seconds, amplitude) for every scanned sample."""
        sample_rate = self._require_audio(take).sample_rate
        for block_start, amplitudes in self.iter_blocks(take):
            for j, amplitude in enumerate(amplitudes):
                yield block_start + j / sample_rate, float(amplitude)

    def find_peak_offset(self, take: Take) -> float:
        """
        Return the offset in seconds of the loudest sample, relative to the
        take start. Ties go to the earliest sample; silence returns 0.0.
        """
        sample_rate = self._require_audio(take).sample_rate
        max_amp = 0.0
        max_offset = 0.0

        for block_start, amplitudes in self.iter_blocks(take):
            if amplitudes.size == 0:
                continue
            j = int(np.argmax(amplitudes))
            amp = float(amplitudes[j])
            if amp > max_amp:
                max_amp = amp
                max_offset = block_start + j / sample_rate

        log.debug("Peak of take %s at %.6fs (amplitude %.4f)", take.name, max_offset, max_amp)
        return max_offset
