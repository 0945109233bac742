"""
Assemblage Game Engine.

Pure Python rules engine with zero UI/database dependencies.
Handles deck setup, taking cards from the layout, ensemble placement,
completeness detection and final scoring.
"""

from assemblage.engine.base import (
    CardCategory,
    CardDefinition,
    CardInstance,
    Ensemble,
    GamePhase,
    GameRules,
    PendingCard,
    PlacedCard,
    PlayerBoard,
    Rotation,
    Side,
    SideCounts,
)
from assemblage.engine.catalog import CardCatalog, CatalogBuilder, default_catalog
from assemblage.engine.ensembles import ValidPlacement
from assemblage.engine.errors import (
    CatalogError,
    IllegalPlacementError,
    InvalidEnsembleIndexError,
    InvalidMoveError,
    InvalidPlayerCountError,
    InvalidRowError,
    MoveError,
    NoPendingCardError,
    NotYourTurnError,
    PendingCardExistsError,
    RowEmptyError,
    WrongPhaseError,
)
from assemblage.engine.game import AssemblageEngine, GameState
from assemblage.engine.layout import Layout
from assemblage.engine.moves import PlaceMove, TakeMove, parse_move
from assemblage.engine.scoring import ScoreBreakdown, ScoreSheet

__all__ = [
    # Data Classes
    "CardDefinition",
    "CardInstance",
    "Ensemble",
    "GameRules",
    "GameState",
    "Layout",
    "PendingCard",
    "PlacedCard",
    "PlayerBoard",
    "ScoreBreakdown",
    "ScoreSheet",
    "SideCounts",
    "ValidPlacement",
    # Enums
    "CardCategory",
    "GamePhase",
    "Rotation",
    "Side",
    # Catalog
    "CardCatalog",
    "CatalogBuilder",
    "default_catalog",
    # Moves
    "PlaceMove",
    "TakeMove",
    "parse_move",
    # Errors
    "CatalogError",
    "IllegalPlacementError",
    "InvalidEnsembleIndexError",
    "InvalidMoveError",
    "InvalidPlayerCountError",
    "InvalidRowError",
    "MoveError",
    "NoPendingCardError",
    "NotYourTurnError",
    "PendingCardExistsError",
    "RowEmptyError",
    "WrongPhaseError",
    # Engine
    "AssemblageEngine",
]
