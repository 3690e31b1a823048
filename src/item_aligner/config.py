"""Item aligner configuration constants.

Plain module values. Environment variables override the few knobs that
tests or power users may want to change.
"""

import os


def _positive_int_from_env(name: str, default: int) -> int:
    env_val = os.environ.get(name)
    if env_val:
        try:
            value = int(env_val)
            if value > 0:
                return value
        except ValueError:
            pass
    return default


# Samples read per accessor call during peak search
BLOCK_SIZE = 4096

# Fade shape codes as stored on items
DEFAULT_FADE_SHAPE = 0
EQUAL_POWER_FADE_SHAPE = 3

# Override with ITEM_ALIGNER_MAX_UNDO
MAX_UNDO_HISTORY = _positive_int_from_env("ITEM_ALIGNER_MAX_UNDO", 25)

UNDO_LABEL = "Align highest transient to edit cursor + crossfade"
NO_TARGET_MESSAGE = "No item selected or under mouse cursor."
