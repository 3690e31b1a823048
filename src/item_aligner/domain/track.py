from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .item import Item


@dataclass(eq=False)
class Track:
    """
    Ordered container of items.
    Items may overlap; the index is maintained by the owning Project.
    """
    name: str
    muted: bool = False
    index: int | None = None
    items: list[Item] = field(default_factory=list)

    def add_item(self, item: Item) -> None:
        """Take ownership of `item`, removing it from its previous track."""
        if item.track is self:
            return
        if item.track is not None:
            item.track.remove_item(item)
        self.items.append(item)
        item.track = self

    def remove_item(self, item: Item) -> None:
        if item not in self.items:
            raise ValueError(f"Item {item.name} not found on track {self.name}.")
        self.items.remove(item)
        item.track = None

    def get_items(self) -> list[Item]:
        return list(self.items)
