"""
Filter Specification Model

The combined set of active browse predicates at a point in time. Held in
view state only, never persisted.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .enums import ALL

Range = Tuple[float, float]

UNBOUNDED: Range = (-math.inf, math.inf)


@dataclass(frozen=True)
class FilterSpec:
    """
    Browse filters. The defaults form the identity filter: every listing
    passes.

    - search: substring of the listing name, case-insensitive
    - engine, transmission, color: exact value or "All"
    - year: exact year or None
    - price_range, mileage_range, engine_size_range: inclusive [lo, hi]
    - location: substring of the listing location, case-insensitive
    """

    search: str = ''
    engine: str = ALL
    year: Optional[int] = None
    price_range: Range = UNBOUNDED
    mileage_range: Range = UNBOUNDED
    engine_size_range: Range = UNBOUNDED
    transmission: str = ALL
    color: str = ALL
    location: str = ''

    def ranges(self) -> Tuple[Range, Range, Range]:
        return self.price_range, self.mileage_range, self.engine_size_range

    def has_inverted_range(self) -> bool:
        """True when some range has lo > hi, so nothing can match."""
        return any(lo > hi for lo, hi in self.ranges())

    def is_identity(self) -> bool:
        return self == FilterSpec()

    def replace(self, **changes) -> "FilterSpec":
        return replace(self, **changes)
