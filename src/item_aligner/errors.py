class AlignmentError(Exception):
    """Base class for failures while aligning a single item."""


class NoTargetError(AlignmentError):
    """Nothing hovered and nothing selected."""


class UnsupportedTakeError(AlignmentError):
    """The item has no active take, or the take does not carry audio."""


class MissingAudioSourceError(AlignmentError):
    """The take has no resolvable audio source."""


class TrackAllocationError(AlignmentError):
    """A destination track could not be created."""
