"""
Assemblage - Ensemble Geometry

Placement legality, connected-component discovery and completeness testing
for the cards on a player's private board.

Placement rules (against a non-empty ensemble):
    - The target cell must be empty and orthogonally adjacent to the ensemble
    - Every touching edge pair must carry the same number of dots (0-0 allowed)
    - At least one touching edge pair must carry dots (> 0)

An ensemble is complete when every dotted edge of every card touches a member
card whose facing edge has the same count.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from assemblage.engine.base import PlacedCard, PlayerBoard, Rotation
from assemblage.engine.catalog import CardCatalog
from assemblage.engine.geometry import (
    NEIGHBOR_OFFSETS,
    rotated_sides,
    side_facing,
    side_toward,
)


@dataclass(frozen=True)
class ValidPlacement:
    """
    One legal destination for a card.

    Attributes:
        row: Target row
        col: Target column
        ensemble_index: Existing ensemble to extend (None for a new ensemble)
        new_ensemble: True when the card starts a new ensemble
    """
    row: int
    col: int
    ensemble_index: int | None = None
    new_ensemble: bool = False


def cell_map(placed_cards: Iterable[PlacedCard]) -> dict[tuple[int, int], PlacedCard]:
    """Index placed cards by (row, col)."""
    return {pc.position: pc for pc in placed_cards}


def can_place(
    catalog: CardCatalog,
    placed_cards: Sequence[PlacedCard],
    code: str,
    rotation: Rotation | int,
    row: int,
    col: int,
) -> bool:
    """
    Check whether a card may join an ensemble at (row, col).

    Args:
        catalog: Card geometry source
        placed_cards: Current members of the ensemble
        code: Code of the card being placed
        rotation: Orientation of the card being placed
        row: Target row
        col: Target column

    Returns:
        True if the placement is legal
    """
    cells = cell_map(placed_cards)
    if (row, col) in cells:
        return False

    neighbors = [
        (d_row, d_col, cells[(row + d_row, col + d_col)])
        for d_row, d_col in NEIGHBOR_OFFSETS
        if (row + d_row, col + d_col) in cells
    ]
    if not cells:
        return True
    if not neighbors:
        return False

    new_sides = rotated_sides(catalog, code, rotation)
    has_connection = False
    for d_row, d_col, neighbor in neighbors:
        ours = side_toward(new_sides, d_row, d_col)
        theirs = side_facing(catalog, neighbor, row, col)
        if ours != theirs:
            return False
        if ours > 0:
            has_connection = True
    return has_connection


def connected_components(placed_cards: Sequence[PlacedCard]) -> list[list[PlacedCard]]:
    """
    Partition placed cards into orthogonally connected groups.

    Uses an explicit stack, so deep chains do not hit the recursion limit.
    Components are returned in order of their first card in the input.
    """
    cells = cell_map(placed_cards)
    visited: set[tuple[int, int]] = set()
    components: list[list[PlacedCard]] = []

    for start in placed_cards:
        if start.position in visited:
            continue
        component: list[PlacedCard] = []
        stack = [start]
        visited.add(start.position)
        while stack:
            current = stack.pop()
            component.append(current)
            for d_row, d_col in NEIGHBOR_OFFSETS:
                key = (current.row + d_row, current.col + d_col)
                if key in cells and key not in visited:
                    visited.add(key)
                    stack.append(cells[key])
        components.append(component)

    return components


def is_complete(catalog: CardCatalog, placed_cards: Sequence[PlacedCard]) -> bool:
    """
    Check whether every dotted edge is matched by an adjacent member.

    Args:
        catalog: Card geometry source
        placed_cards: Members of one ensemble

    Returns:
        True if no member has an unmatched nonzero edge
    """
    cells = cell_map(placed_cards)
    for pc in placed_cards:
        sides = rotated_sides(catalog, pc.card.code, pc.rotation)
        for d_row, d_col in NEIGHBOR_OFFSETS:
            count = side_toward(sides, d_row, d_col)
            if count == 0:
                continue
            neighbor = cells.get((pc.row + d_row, pc.col + d_col))
            if neighbor is None:
                return False
            if side_facing(catalog, neighbor, pc.row, pc.col) != count:
                return False
    return True


def valid_placements(
    catalog: CardCatalog,
    boards: Sequence[PlayerBoard],
    player_id: str,
    code: str,
    rotation: Rotation | int,
) -> list[ValidPlacement]:
    """
    Enumerate every legal placement of a card for one player.

    Each ensemble's bounding box, grown by one cell on every side, is scanned
    with can_place. Starting a new ensemble at (0, 0) is always offered last.

    Args:
        catalog: Card geometry source
        boards: All player boards
        player_id: Player placing the card
        code: Card code
        rotation: Orientation to test

    Returns:
        Legal placements, or an empty list if the player has no board
    """
    board = next((b for b in boards if b.player_id == player_id), None)
    if board is None:
        return []

    placements: list[ValidPlacement] = []
    for index, ensemble in enumerate(board.ensembles):
        placed = ensemble.placed_cards
        if placed:
            min_row = min(pc.row for pc in placed)
            max_row = max(pc.row for pc in placed)
            min_col = min(pc.col for pc in placed)
            max_col = max(pc.col for pc in placed)
        else:
            min_row = max_row = min_col = max_col = 0
        for r in range(min_row - 1, max_row + 2):
            for c in range(min_col - 1, max_col + 2):
                if can_place(catalog, placed, code, rotation, r, c):
                    placements.append(ValidPlacement(row=r, col=c, ensemble_index=index))

    placements.append(ValidPlacement(row=0, col=0, new_ensemble=True))
    return placements
