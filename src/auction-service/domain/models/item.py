"""Item value object.

The vehicle being auctioned. Every auction owns exactly one item.
"""

from dataclasses import dataclass


@dataclass
class Item:
    """The vehicle offered in an auction listing."""

    make: str
    """Manufacturer (e.g., 'Ford'). Listings are ordered by this field."""

    model: str
    """Model name (e.g., 'Mustang')."""

    year: int
    """Model year."""

    color: str | None = None
    """Exterior color."""

    mileage: int | None = None
    """Odometer reading."""

    image_url: str | None = None
    """Public URL of the listing picture."""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "mileage": self.mileage,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        """Create from dictionary."""
        return cls(
            make=data["make"],
            model=data["model"],
            year=data["year"],
            color=data.get("color"),
            mileage=data.get("mileage"),
            image_url=data.get("image_url"),
        )
