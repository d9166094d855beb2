"""Domain models (value objects) for the Auction Service."""

from domain.models.item import Item
from domain.models.item_patch import ItemPatch, apply_item_patch

__all__ = [
    "Item",
    "ItemPatch",
    "apply_item_patch",
]
