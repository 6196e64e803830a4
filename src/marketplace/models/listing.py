"""
Listing Model for marketplace vehicles

Represents a car or bike listing, mapped to the ``listings`` table schema.
"""

from dataclasses import dataclass, field, replace
from typing import List, Dict, Any


@dataclass(frozen=True)
class ListingDraft:
    """
    A listing that has not been stored yet (the store assigns the id).

    Maps to the database schema:
    - name: Brand and model, e.g. "Tesla Model 3"
    - price: Price in EUR
    - engine: Petrol, Diesel, Electric, Hybrid
    - engineSize: Liters
    - mileage: Kilometers
    - transmission: Automatic, Manual, Semi-Automatic
    - color: Free text
    - year: Production year
    - description: Free text
    - images: Public image URLs, in upload order
    - location: Free text
    """

    name: str
    price: float
    engine: str
    engine_size: float
    mileage: int
    transmission: str
    color: str
    year: int
    description: str = ''
    images: List[str] = field(default_factory=list)
    location: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database insertion"""
        return {
            'name': self.name,
            'price': self.price,
            'engine': self.engine,
            'engineSize': self.engine_size,
            'mileage': self.mileage,
            'transmission': self.transmission,
            'color': self.color,
            'year': self.year,
            'description': self.description,
            'images': list(self.images),
            'location': self.location
        }

    def with_images(self, images: List[str]) -> "ListingDraft":
        return replace(self, images=list(images))

    def _fields(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(frozen=True)
class Listing(ListingDraft):
    """
    A stored listing. Immutable once fetched; updates replace it wholesale.
    """

    id: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database update"""
        data = super().to_dict()
        data['id'] = self.id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Listing":
        """
        Create Listing from a database row.

        Missing optional text fields become empty strings and a missing
        image list becomes an empty list.

        Raises:
            KeyError, TypeError, ValueError: if a required column is absent
            or cannot be converted
        """
        return cls(
            id=str(data['id']),
            name=data['name'],
            price=float(data['price']),
            engine=data['engine'],
            engine_size=float(data.get('engineSize') or 0),
            mileage=int(data['mileage']),
            transmission=data['transmission'],
            color=data.get('color') or '',
            year=int(data['year']),
            description=data.get('description') or '',
            images=list(data.get('images') or []),
            location=data.get('location') or ''
        )

    @classmethod
    def from_draft(cls, listing_id: str, draft: ListingDraft) -> "Listing":
        return cls(id=listing_id, **draft._fields())

    def get_preview_data(self) -> Dict[str, Any]:
        """Get data for card display"""
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'engine': self.engine,
            'engineSize': self.engine_size,
            'mileage': self.mileage,
            'transmission': self.transmission,
            'year': self.year,
            'image': self.images[0] if self.images else None,
            'location': self.location
        }
