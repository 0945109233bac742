"""
Assemblage - Card Geometry

Rotation of connection points and edge lookups between neighbouring cells.
Rotation is clockwise: at 90 degrees the old left edge becomes the top edge.
"""

from assemblage.engine.base import PlacedCard, Rotation, SideCounts
from assemblage.engine.catalog import CardCatalog

# (row delta, col delta) to each orthogonal neighbour
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def rotate_sides(sides: SideCounts, rotation: Rotation | int) -> SideCounts:
    """
    Permute side counts for a clockwise rotation.

    Args:
        sides: Counts in the base orientation
        rotation: 0, 90, 180 or 270

    Returns:
        Counts as seen after rotating the card
    """
    rotation = Rotation(rotation)
    if rotation == Rotation.R0:
        return sides
    top, right, bottom, left = sides.as_tuple()
    if rotation == Rotation.R90:
        return SideCounts(top=left, right=top, bottom=right, left=bottom)
    if rotation == Rotation.R180:
        return SideCounts(top=bottom, right=left, bottom=top, left=right)
    return SideCounts(top=right, right=bottom, bottom=left, left=top)


def rotated_sides(catalog: CardCatalog, code: str, rotation: Rotation | int) -> SideCounts:
    """Side counts of a card code in the given rotation."""
    return rotate_sides(catalog.base_sides(code), rotation)


def side_toward(sides: SideCounts, d_row: int, d_col: int) -> int:
    """Count on the edge pointing along (d_row, d_col); 0 if not orthogonal."""
    if d_row == -1 and d_col == 0:
        return sides.top
    if d_row == 1 and d_col == 0:
        return sides.bottom
    if d_row == 0 and d_col == -1:
        return sides.left
    if d_row == 0 and d_col == 1:
        return sides.right
    return 0


def side_facing(
    catalog: CardCatalog,
    placed: PlacedCard,
    neighbor_row: int,
    neighbor_col: int,
) -> int:
    """
    Connection count on the edge of a placed card that borders a neighbour cell.

    Args:
        catalog: Card geometry source
        placed: The placed card
        neighbor_row: Row of the neighbouring cell
        neighbor_col: Column of the neighbouring cell

    Returns:
        The rotated count on the bordering edge, or 0 if the cell is not
        orthogonally adjacent
    """
    sides = rotated_sides(catalog, placed.card.code, placed.rotation)
    return side_toward(sides, neighbor_row - placed.row, neighbor_col - placed.col)
