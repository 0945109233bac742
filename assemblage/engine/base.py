"""
Assemblage - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so a game state
can be shared between successive states without defensive copies.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class CardCategory(Enum):
    """Shape family printed on a card."""
    POINT = "point"
    LINE = "line"
    TRIANGLE = "triangle"
    SQUARE = "square"


class Rotation(IntEnum):
    """Clockwise orientation of a placed card, in degrees."""
    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270


class Side(Enum):
    """Open end of a layout row."""
    LEFT = "left"
    RIGHT = "right"


class GamePhase(Enum):
    """Lifecycle of a game."""
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class SideCounts:
    """
    Connection points on each edge of a card.

    Attributes:
        top: Dots on the top edge
        right: Dots on the right edge
        bottom: Dots on the bottom edge
        left: Dots on the left edge
    """
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def __post_init__(self) -> None:
        """Validate counts are non-negative."""
        for name in ("top", "right", "bottom", "left"):
            if getattr(self, name) < 0:
                raise ValueError(f"Side count {name} cannot be negative.")

    @property
    def total(self) -> int:
        return self.top + self.right + self.bottom + self.left

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Counts in (top, right, bottom, left) order."""
        return (self.top, self.right, self.bottom, self.left)


@dataclass(frozen=True)
class CardDefinition:
    """
    A logical card type (not an individual copy).

    Attributes:
        code: Logical code, e.g. "B"
        category: Shape family
        points: Point value used for scoring
        count: Number of physical copies printed
    """
    code: str
    category: CardCategory
    points: int
    count: int

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Card code cannot be empty.")
        if self.count < 0:
            raise ValueError(f"Card {self.code} has negative count {self.count}.")


@dataclass(frozen=True)
class CardInstance:
    """
    One physical copy of a card.

    Attributes:
        instance_id: Unique id within a deck
        code: Reference to the logical card
        category: Shape family
        points: Point value
    """
    instance_id: str
    code: str
    category: CardCategory
    points: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CardInstance":
        return cls(
            instance_id=data["instance_id"],
            code=data["code"],
            category=CardCategory(data["category"]),
            points=data["points"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "instance_id": self.instance_id,
            "code": self.code,
            "category": self.category.value,
            "points": self.points,
        }


@dataclass(frozen=True)
class PlacedCard:
    """
    A card pinned to a player's private board.

    Attributes:
        card: The physical card
        row: Board row (unbounded)
        col: Board column (unbounded)
        rotation: Clockwise orientation
    """
    card: CardInstance
    row: int
    col: int
    rotation: Rotation = Rotation.R0

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlacedCard":
        return cls(
            card=CardInstance.from_dict(data["card"]),
            row=data["row"],
            col=data["col"],
            rotation=Rotation(data.get("rotation", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "card": self.card.to_dict(),
            "row": self.row,
            "col": self.col,
            "rotation": int(self.rotation),
        }


@dataclass(frozen=True)
class Ensemble:
    """
    One connected group of placed cards with its own coordinate space.

    Attributes:
        placed_cards: Cards in placement order
    """
    placed_cards: tuple[PlacedCard, ...] = tuple()

    def __len__(self) -> int:
        return len(self.placed_cards)

    @property
    def points(self) -> int:
        """Sum of the point values of every member card."""
        return sum(pc.card.points for pc in self.placed_cards)

    def with_card(self, placed: PlacedCard) -> "Ensemble":
        return Ensemble(placed_cards=self.placed_cards + (placed,))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ensemble":
        return cls(
            placed_cards=tuple(PlacedCard.from_dict(pc) for pc in data.get("placed_cards", []))
        )

    def to_dict(self) -> dict[str, Any]:
        return {"placed_cards": [pc.to_dict() for pc in self.placed_cards]}


@dataclass(frozen=True)
class PlayerBoard:
    """
    One player's private boards.

    Attributes:
        player_id: Owner
        ensembles: Ensembles in creation order
    """
    player_id: str
    ensembles: tuple[Ensemble, ...] = tuple()

    @property
    def card_count(self) -> int:
        return sum(len(e) for e in self.ensembles)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerBoard":
        return cls(
            player_id=data["player_id"],
            ensembles=tuple(Ensemble.from_dict(e) for e in data.get("ensembles", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "ensembles": [e.to_dict() for e in self.ensembles],
        }


@dataclass(frozen=True)
class PendingCard:
    """
    A card taken from the layout and not yet placed.

    Attributes:
        player_id: Player who took the card
        card: The taken card
    """
    player_id: str
    card: CardInstance

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PendingCard":
        return cls(player_id=data["player_id"], card=CardInstance.from_dict(data["card"]))

    def to_dict(self) -> dict[str, Any]:
        return {"player_id": self.player_id, "card": self.card.to_dict()}


@dataclass(frozen=True)
class GameRules:
    """
    Table configuration for a game session.

    Attributes:
        rows: Layout rows
        cols: Layout columns
        size_bonus: Bonus shared by the largest complete ensemble(s)
        min_players: Minimum players at the table
        max_players: Maximum players at the table
    """
    rows: int = 4
    cols: int = 12
    size_bonus: int = 50
    min_players: int = 2
    max_players: int = 4

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("Layout must have at least one row and one column.")
        if self.size_bonus < 0:
            raise ValueError("Size bonus cannot be negative.")
        if not 1 <= self.min_players <= self.max_players:
            raise ValueError(
                f"Invalid player range {self.min_players}-{self.max_players}."
            )

    @property
    def layout_size(self) -> int:
        return self.rows * self.cols
