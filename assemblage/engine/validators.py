"""
Assemblage - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return normalized data or raise a descriptive MoveError subclass.
"""

from typing import Sequence

from assemblage.engine.base import GameRules, Rotation, Side
from assemblage.engine.errors import InvalidMoveError, InvalidPlayerCountError


def validate_player_ids(player_ids: Sequence[str], rules: GameRules) -> tuple[str, ...]:
    """
    Validate the players joining a game.

    Args:
        player_ids: Player ids in join order
        rules: Table configuration (player range)

    Returns:
        Player ids as a tuple, order preserved

    Raises:
        InvalidPlayerCountError: If the count is out of range or ids repeat
    """
    if isinstance(player_ids, str):
        raise InvalidPlayerCountError("Player ids must be a sequence of ids, not a single string.")

    ids = tuple(player_ids)
    count = len(ids)

    if not (rules.min_players <= count <= rules.max_players):
        raise InvalidPlayerCountError(
            f"Assemblage requires between {rules.min_players} and "
            f"{rules.max_players} players, got {count}."
        )

    if len(set(ids)) != count:
        raise InvalidPlayerCountError("Player ids must be unique.")

    for i, player_id in enumerate(ids):
        if not isinstance(player_id, str) or not player_id:
            raise InvalidPlayerCountError(f"Player id at index {i} must be a non-empty string.")

    return ids


def validate_rotation(rotation: int | Rotation) -> Rotation:
    """
    Validate a clockwise rotation in degrees.

    Args:
        rotation: One of 0, 90, 180, 270

    Returns:
        The matching Rotation member

    Raises:
        InvalidMoveError: If rotation is not a quarter turn
    """
    if isinstance(rotation, bool) or not isinstance(rotation, int):
        raise InvalidMoveError(f"Rotation must be an integer, got {type(rotation).__name__}.")
    try:
        return Rotation(rotation)
    except ValueError:
        raise InvalidMoveError(
            f"Rotation must be one of 0, 90, 180, 270, got {rotation}."
        ) from None


def validate_side(side: str | Side) -> Side:
    """Validate a row end ("left" or "right")."""
    if isinstance(side, Side):
        return side
    try:
        return Side(side)
    except ValueError:
        raise InvalidMoveError(f"Side must be 'left' or 'right', got {side!r}.") from None


def validate_coordinate(value: int, name: str) -> int:
    """Validate a board coordinate. Board coordinates may be negative."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMoveError(f"{name} must be an integer, got {type(value).__name__}.")
    return value
