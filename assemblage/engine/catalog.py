"""
Assemblage - Card Catalog

Static table of every card type: category, point value, print count and the
connection points on each side in the base orientation. The table is built
once through CatalogBuilder and is immutable afterwards.

Default deck (48 cards):
    - Points:    A x16
    - Lines:     B x5, C x6
    - Triangles: D x4, E x4, F x2
    - Squares:   G x2, H x3, I x2, J x2, K x2
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping

from assemblage.engine.base import CardCategory, CardDefinition, SideCounts
from assemblage.engine.errors import CatalogError

CATEGORY_POINTS: Mapping[CardCategory, int] = MappingProxyType({
    CardCategory.POINT: 1,
    CardCategory.LINE: 2,
    CardCategory.TRIANGLE: 3,
    CardCategory.SQUARE: 4,
})

_NO_SIDES = SideCounts()


@dataclass(frozen=True)
class CardCatalog:
    """
    Immutable lookup of card definitions and base geometry by code.

    Attributes:
        definitions: Definitions keyed by code, in catalog order
        geometry: Base-orientation side counts keyed by code
    """
    definitions: Mapping[str, CardDefinition]
    geometry: Mapping[str, SideCounts]

    def __iter__(self) -> Iterator[CardDefinition]:
        return iter(self.definitions.values())

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, code: object) -> bool:
        return code in self.definitions

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self.definitions)

    @property
    def total_count(self) -> int:
        """Number of physical cards across all definitions."""
        return sum(d.count for d in self.definitions.values())

    def definition(self, code: str) -> CardDefinition:
        try:
            return self.definitions[code]
        except KeyError:
            raise CatalogError(f"Unknown card code {code!r}.") from None

    def base_sides(self, code: str) -> SideCounts:
        """Side counts at rotation 0. Unknown codes have no connection points."""
        return self.geometry.get(code, _NO_SIDES)

    def points_for(self, code: str) -> int:
        """Canonical point value of a code; 0 for unknown codes."""
        definition = self.definitions.get(code)
        return definition.points if definition is not None else 0


class CatalogBuilder:
    """
    Collects card definitions and geometry, then freezes them into a CardCatalog.

    Geometry overrides (used when transcribing card faces) must be applied
    here, before build().
    """

    def __init__(self) -> None:
        self._definitions: dict[str, CardDefinition] = {}
        self._geometry: dict[str, SideCounts] = {}

    def add(
        self,
        code: str,
        category: CardCategory,
        count: int,
        sides: SideCounts,
        points: int | None = None,
    ) -> "CatalogBuilder":
        """
        Register a card type.

        Args:
            code: Logical card code
            category: Shape family
            count: Physical copies in the deck
            sides: Connection points in the base orientation
            points: Point value (defaults to the category value)

        Raises:
            CatalogError: If the code is already registered
        """
        if code in self._definitions:
            raise CatalogError(f"Card code {code!r} registered twice.")
        if points is None:
            points = CATEGORY_POINTS[category]
        self._definitions[code] = CardDefinition(
            code=code, category=category, points=points, count=count
        )
        self._geometry[code] = sides
        return self

    def override_geometry(self, code: str, sides: SideCounts) -> "CatalogBuilder":
        """Replace the base side counts of an already registered code."""
        if code not in self._definitions:
            raise CatalogError(f"Cannot override geometry of unknown card {code!r}.")
        self._geometry[code] = sides
        return self

    def build(self) -> CardCatalog:
        return CardCatalog(
            definitions=MappingProxyType(dict(self._definitions)),
            geometry=MappingProxyType(dict(self._geometry)),
        )

    @classmethod
    def default(cls) -> "CatalogBuilder":
        """Builder pre-loaded with the printed deck."""
        builder = cls()
        (
            builder
            .add("A", CardCategory.POINT, 16, SideCounts(0, 0, 0, 1))
            .add("B", CardCategory.LINE, 5, SideCounts(0, 1, 0, 1))
            .add("C", CardCategory.LINE, 6, SideCounts(0, 0, 0, 2))
            .add("D", CardCategory.TRIANGLE, 4, SideCounts(1, 0, 1, 1))
            .add("E", CardCategory.TRIANGLE, 4, SideCounts(0, 1, 0, 2))
            .add("F", CardCategory.TRIANGLE, 2, SideCounts(0, 0, 0, 3))
            .add("G", CardCategory.SQUARE, 2, SideCounts(1, 1, 1, 1))
            .add("H", CardCategory.SQUARE, 3, SideCounts(1, 0, 1, 2))
            .add("I", CardCategory.SQUARE, 2, SideCounts(0, 2, 0, 2))
            .add("J", CardCategory.SQUARE, 2, SideCounts(0, 1, 0, 3))
            .add("K", CardCategory.SQUARE, 2, SideCounts(0, 0, 0, 4))
        )
        return builder


@lru_cache(maxsize=1)
def default_catalog() -> CardCatalog:
    """Cached catalog of the printed deck."""
    return CatalogBuilder.default().build()
