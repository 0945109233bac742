"""
Assemblage - Deck Builder

Expands the catalog into one CardInstance per printed copy and shuffles them.
"""

import logging
import random

from assemblage.engine.base import CardInstance, GameRules
from assemblage.engine.catalog import CardCatalog
from assemblage.engine.errors import CatalogError

logger = logging.getLogger(__name__)


def expand_catalog(catalog: CardCatalog) -> list[CardInstance]:
    """One instance per print-count unit, in catalog order."""
    instances: list[CardInstance] = []
    for definition in catalog:
        for copy in range(1, definition.count + 1):
            instances.append(
                CardInstance(
                    instance_id=f"{definition.code}-{copy:02d}",
                    code=definition.code,
                    category=definition.category,
                    points=definition.points,
                )
            )
    return instances


def shuffle_cards(cards: list[CardInstance], rng: random.Random) -> None:
    """Fisher-Yates shuffle in place."""
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]


def build_deck(
    catalog: CardCatalog,
    rules: GameRules,
    rng: random.Random | None = None,
) -> tuple[CardInstance, ...]:
    """
    Build a shuffled deck sized exactly to the layout.

    Args:
        catalog: Card catalog to expand
        rules: Table configuration (layout dimensions)
        rng: Random source (a fresh unseeded Random if omitted)

    Returns:
        rows x cols card instances in random order

    Raises:
        CatalogError: If the catalog does not hold exactly rows x cols cards
    """
    expected = rules.layout_size
    if catalog.total_count != expected:
        raise CatalogError(
            f"Card catalog must contain exactly {expected} cards, got {catalog.total_count}."
        )

    cards = expand_catalog(catalog)
    shuffle_cards(cards, rng if rng is not None else random.Random())
    logger.debug("Built deck of %d cards", len(cards))
    return tuple(cards)
