from item_aligner.domain.item import Item
from item_aligner.domain.selection import SelectionState
from item_aligner.errors import NoTargetError


def resolve_targets(selection: SelectionState) -> tuple[list[Item], bool]:
    """
    Pick the items to align from the hover and selection state.

    Returns (items, use_track_stacking). A hovered item wins unless it is one
    of several selected items; hovering an unselected item also makes it the
    only selected item.
    """
    hovered = selection.hovered
    count = selection.count()

    if hovered is not None:
        if selection.is_selected(hovered) and count > 1:
            return list(selection.selected), True
        selection.select_only(hovered)
        return [hovered], False

    if count == 1:
        return [selection.selected[0]], False
    if count > 1:
        return list(selection.selected), True

    raise NoTargetError("Nothing to align.")
