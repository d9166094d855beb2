"""Partial update of an Item.

A patch carries only the fields the caller wants to change. ``None`` means
"leave as is", so a field can never be cleared through a patch.
"""

from dataclasses import dataclass, fields, replace

from domain.models.item import Item


@dataclass(frozen=True)
class ItemPatch:
    """Optional overrides for the fields of an :class:`Item`."""

    make: str | None = None
    model: str | None = None
    year: int | None = None
    color: str | None = None
    mileage: int | None = None
    image_url: str | None = None

    def changes(self) -> dict:
        """Return the fields present in the patch."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        """True when the patch carries no field at all."""
        return not self.changes()


def apply_item_patch(item: Item, patch: ItemPatch) -> Item:
    """Merge ``patch`` into ``item`` and return the result as a new Item.

    Each field present in the patch overwrites the item's value; absent fields
    keep their current value. The input item is not modified.

    Args:
        item: The current item
        patch: The partial update to merge

    Returns:
        The merged item
    """
    return replace(item, **patch.changes())
