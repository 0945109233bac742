"""
Assemblage - Test Configuration and Fixtures

Common fixtures and card builders for all test modules.
"""

import itertools
import random
from typing import Callable

import pytest

from assemblage.engine.base import (
    CardInstance,
    Ensemble,
    GamePhase,
    PendingCard,
    PlacedCard,
    PlayerBoard,
    Rotation,
    SideCounts,
)
from assemblage.engine.catalog import CardCatalog, CatalogBuilder, default_catalog
from assemblage.engine.game import AssemblageEngine, GameState
from assemblage.engine.layout import Layout


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

@pytest.fixture
def catalog() -> CardCatalog:
    """The printed 48-card catalog."""
    return default_catalog()


@pytest.fixture
def blank_catalog() -> CardCatalog:
    """Printed catalog where card A has no connection points at all."""
    return CatalogBuilder.default().override_geometry("A", SideCounts()).build()


# =============================================================================
# CARD BUILDERS
# =============================================================================

@pytest.fixture
def make_card(catalog: CardCatalog) -> Callable[[str], CardInstance]:
    """Factory for card instances with unique ids."""
    counter = itertools.count(1)

    def _make(code: str) -> CardInstance:
        definition = catalog.definition(code)
        return CardInstance(
            instance_id=f"{code}-t{next(counter)}",
            code=code,
            category=definition.category,
            points=definition.points,
        )

    return _make


@pytest.fixture
def make_placed(make_card) -> Callable[..., PlacedCard]:
    """Factory for placed cards: make_placed(code, row, col, rotation=0)."""

    def _make(code: str, row: int, col: int, rotation: int = 0) -> PlacedCard:
        return PlacedCard(card=make_card(code), row=row, col=col, rotation=Rotation(rotation))

    return _make


@pytest.fixture
def three_card_ensemble(make_placed) -> Ensemble:
    """Complete ensemble worth 6 points: C(180) - E - A."""
    return Ensemble(placed_cards=(
        make_placed("C", 0, -1, 180),
        make_placed("E", 0, 0),
        make_placed("A", 0, 1),
    ))


@pytest.fixture
def pair_ensemble(make_placed) -> Callable[[], Ensemble]:
    """Factory for a complete two-card ensemble worth 4 points: C(180) - C."""

    def _make() -> Ensemble:
        return Ensemble(placed_cards=(
            make_placed("C", 0, 0, 180),
            make_placed("C", 0, 1),
        ))

    return _make


# =============================================================================
# ENGINE / STATE FIXTURES
# =============================================================================

@pytest.fixture
def engine() -> AssemblageEngine:
    """Engine with a seeded random source."""
    return AssemblageEngine(rng=random.Random(1234))


@pytest.fixture
def make_state(make_card) -> Callable[..., GameState]:
    """
    Factory for hand-built states.

    make_state(rows, players=("p1", "p2"), turn=0, boards=None, pending=None)
    where rows is a list of lists of card codes (None for a taken cell).
    """

    def _make(
        rows: list[list[str | None]],
        players: tuple[str, ...] = ("p1", "p2"),
        turn: int = 0,
        boards: tuple[PlayerBoard, ...] | None = None,
        pending: str | None = None,
    ) -> GameState:
        layout = Layout(cells=tuple(
            tuple(make_card(code) if code is not None else None for code in row)
            for row in rows
        ))
        if boards is None:
            boards = tuple(PlayerBoard(player_id=pid) for pid in players)
        pending_card = None
        if pending is not None:
            pending_card = PendingCard(player_id=players[turn], card=make_card(pending))
        return GameState(
            layout=layout,
            turn_order=players,
            current_turn_index=turn,
            boards=boards,
            pending_card=pending_card,
            phase=GamePhase.PLAYING,
        )

    return _make
