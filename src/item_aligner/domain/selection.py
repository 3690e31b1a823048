from dataclasses import dataclass, field

from .item import Item


@dataclass
class SelectionState:
    """Selected items plus the item under the pointer, if any."""
    selected: list[Item] = field(default_factory=list)
    hovered: Item | None = None

    def is_selected(self, item: Item) -> bool:
        return any(s is item for s in self.selected)

    def count(self) -> int:
        return len(self.selected)

    def clear(self) -> None:
        self.selected.clear()

    def select(self, item: Item) -> None:
        if not self.is_selected(item):
            self.selected.append(item)

    def select_only(self, item: Item) -> None:
        self.clear()
        self.selected.append(item)
