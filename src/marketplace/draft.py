"""
Listing Draft parsing

The post-listing form keeps every field as raw text while the user types.
On submit the text is parsed into a typed ListingDraft; problems are
collected per field instead of raised, so the form can show them all at once.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

from .models.enums import ENGINE_TYPES, TRANSMISSION_TYPES
from .models.listing import ListingDraft

REQUIRED_MESSAGE = 'This field is required'


@dataclass
class DraftForm:
    """Raw form fields, exactly as entered."""

    name: str = ''
    price: str = ''
    engine: str = ''
    engine_size: str = ''
    mileage: str = ''
    transmission: str = ''
    color: str = ''
    year: str = ''
    description: str = ''
    location: str = ''

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


@dataclass
class DraftResult:
    """Either a parsed draft or the errors that prevented parsing."""

    draft: Optional[ListingDraft] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.draft is not None and not self.errors


def _parse_decimal(value: str) -> Optional[float]:
    try:
        number = float(value.strip().replace(',', '.'))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_integer(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


class _Parser:
    def __init__(self, form: DraftForm):
        self.form = form
        self.errors: Dict[str, str] = {}

    def text(self, name: str, required: bool = True) -> str:
        value = getattr(self.form, name).strip()
        if required and not value:
            self.errors[name] = REQUIRED_MESSAGE
        return value

    def choice(self, name: str, allowed: List[str]) -> str:
        value = self.text(name)
        if value and value not in allowed:
            self.errors[name] = f"Must be one of: {', '.join(allowed)}"
        return value

    def decimal(self, name: str, minimum: Optional[float] = None) -> float:
        raw = self.text(name)
        if not raw:
            return 0.0
        number = _parse_decimal(raw)
        if number is None:
            self.errors[name] = 'Must be a number'
            return 0.0
        if minimum is not None and number < minimum:
            self.errors[name] = f"Must be at least {minimum:g}"
        return number

    def integer(self, name: str, minimum: Optional[int] = None) -> int:
        raw = self.text(name)
        if not raw:
            return 0
        number = _parse_integer(raw)
        if number is None:
            self.errors[name] = 'Must be a whole number'
            return 0
        if minimum is not None and number < minimum:
            self.errors[name] = f"Must be at least {minimum}"
        return number


def parse_draft(form: DraftForm, images: Optional[List[str]] = None) -> DraftResult:
    """
    Coerce raw form text into a ListingDraft.

    Args:
        form: Raw field values
        images: Image URLs to attach (normally filled in after upload)

    Returns:
        DraftResult with ``draft`` set when every field is valid, otherwise
        ``errors`` mapping field name to message
    """
    p = _Parser(form)
    draft = ListingDraft(
        name=p.text('name'),
        price=p.decimal('price', minimum=0),
        engine=p.choice('engine', ENGINE_TYPES),
        engine_size=p.decimal('engine_size', minimum=0),
        mileage=p.integer('mileage', minimum=0),
        transmission=p.choice('transmission', TRANSMISSION_TYPES),
        color=p.text('color'),
        year=p.integer('year', minimum=1),
        description=p.text('description'),
        images=list(images or []),
        location=p.text('location', required=False)
    )
    if p.errors:
        return DraftResult(errors=p.errors)
    return DraftResult(draft=draft)
