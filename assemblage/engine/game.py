"""
Assemblage - Game State Machine

Validates and applies take/place moves, advances turns and scores the game
when the layout runs out. The engine holds only immutable configuration
(catalog, rules, random source); every operation takes a GameState and returns
a new one, sharing every substructure the move did not touch.

Turn structure:
    awaiting take -> (take) -> awaiting placement -> (place) -> next player
The sub-state is implied by ``pending_card``. The game ends after the
placement that follows the last take.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from assemblage.engine.base import (
    Ensemble,
    GamePhase,
    GameRules,
    PendingCard,
    PlacedCard,
    PlayerBoard,
    Rotation,
    Side,
)
from assemblage.engine.catalog import CardCatalog, default_catalog
from assemblage.engine.deck import build_deck
from assemblage.engine.ensembles import (
    ValidPlacement,
    can_place,
    connected_components,
    is_complete,
    valid_placements,
)
from assemblage.engine.errors import (
    IllegalPlacementError,
    InvalidEnsembleIndexError,
    MoveError,
    NoPendingCardError,
    NotYourTurnError,
    PendingCardExistsError,
    WrongPhaseError,
)
from assemblage.engine.layout import Layout
from assemblage.engine.moves import PlaceMove, TakeMove, parse_move
from assemblage.engine.scoring import ScoreSheet, compute_scores, pick_winner
from assemblage.engine.validators import (
    validate_coordinate,
    validate_player_ids,
    validate_rotation,
    validate_side,
)

if TYPE_CHECKING:
    from assemblage.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a game.

    Attributes:
        layout: Shared grid of face-up cards
        turn_order: Player ids in join (clockwise) order
        current_turn_index: Index into turn_order of the player to move
        boards: One board per player, in turn order
        pending_card: Card taken but not yet placed, if any
        phase: PLAYING until the last card is placed
        scores: Final totals by player id (set when finished)
        winner_player_id: Highest scorer (set when finished)
    """
    layout: Layout
    turn_order: tuple[str, ...]
    current_turn_index: int
    boards: tuple[PlayerBoard, ...]
    pending_card: PendingCard | None = None
    phase: GamePhase = GamePhase.PLAYING
    scores: Mapping[str, int] | None = field(default=None, compare=True, hash=False)
    winner_player_id: str | None = None

    def __post_init__(self) -> None:
        """Validate cross-field invariants."""
        if self.scores is not None and not isinstance(self.scores, MappingProxyType):
            object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))
        if not self.turn_order:
            raise ValueError("Turn order cannot be empty.")
        if not (0 <= self.current_turn_index < len(self.turn_order)):
            raise ValueError(
                f"Turn index {self.current_turn_index} out of range for "
                f"{len(self.turn_order)} players."
            )
        if tuple(b.player_id for b in self.boards) != self.turn_order:
            raise ValueError("Boards must match the turn order.")
        if self.pending_card is not None and self.pending_card.player_id != self.current_player_id:
            raise ValueError("Pending card must belong to the player whose turn it is.")

    @property
    def current_player_id(self) -> str:
        return self.turn_order[self.current_turn_index]

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    def board_for(self, player_id: str) -> PlayerBoard:
        for board in self.boards:
            if board.player_id == player_id:
                return board
        raise KeyError(player_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Create GameState from its stored dictionary format."""
        pending = data.get("pending_card")
        return cls(
            layout=Layout.from_dict(data["layout"]),
            turn_order=tuple(data["turn_order"]),
            current_turn_index=data["current_turn_index"],
            boards=tuple(PlayerBoard.from_dict(b) for b in data["boards"]),
            pending_card=PendingCard.from_dict(pending) if pending else None,
            phase=GamePhase(data.get("phase", GamePhase.PLAYING.value)),
            scores=dict(data["scores"]) if data.get("scores") is not None else None,
            winner_player_id=data.get("winner_player_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary. Unset optional fields are omitted."""
        data: dict[str, Any] = {
            "phase": self.phase.value,
            "layout": self.layout.to_dict(),
            "turn_order": list(self.turn_order),
            "current_turn_index": self.current_turn_index,
            "boards": [b.to_dict() for b in self.boards],
        }
        if self.pending_card is not None:
            data["pending_card"] = self.pending_card.to_dict()
        if self.scores is not None:
            data["scores"] = dict(self.scores)
        if self.winner_player_id is not None:
            data["winner_player_id"] = self.winner_player_id
        return data


class AssemblageEngine:
    """
    Rules engine for Assemblage.

    The engine stores configuration only. State is passed in and returned,
    never stored, so one engine can serve any number of games.
    """

    def __init__(
        self,
        catalog: CardCatalog | None = None,
        rules: GameRules | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else default_catalog()
        self.rules = rules if rules is not None else GameRules()
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AssemblageEngine":
        """Engine configured from application settings."""
        return cls(
            rules=GameRules(size_bonus=settings.size_bonus),
            rng=random.Random(settings.random_seed),
        )

    # ── Setup ─────────────────────────────────────────────────────────

    def create_initial_state(self, player_ids: Sequence[str]) -> GameState:
        """
        Deal a new game.

        Args:
            player_ids: Players in join order (becomes the clockwise turn order)

        Returns:
            A PLAYING state with a full layout and empty boards. The starting
            player is drawn at random.

        Raises:
            InvalidPlayerCountError: If the player count is out of range
            CatalogError: If the catalog does not fill the layout
        """
        turn_order = validate_player_ids(player_ids, self.rules)
        deck = build_deck(self.catalog, self.rules, self.rng)
        layout = Layout.initialize(deck, self.rules.rows, self.rules.cols)

        state = GameState(
            layout=layout,
            turn_order=turn_order,
            current_turn_index=self.rng.randrange(len(turn_order)),
            boards=tuple(PlayerBoard(player_id=pid) for pid in turn_order),
        )
        logger.info(
            "Created game for %d players, %s starts", len(turn_order), state.current_player_id
        )
        return state

    # ── Moves ─────────────────────────────────────────────────────────

    def apply_move(self, state: GameState, move: Any, player_id: str) -> GameState:
        """
        Apply a take or place move.

        Args:
            state: State the move was validated against
            move: TakeMove, PlaceMove, or an equivalent dict
            player_id: Player submitting the move

        Returns:
            The next state

        Raises:
            MoveError: Any rejection reason; the input state is unchanged
        """
        parsed = parse_move(move)
        if isinstance(parsed, TakeMove):
            return self.apply_take(state, player_id, parsed.row_index, parsed.side)
        return self.apply_place(
            state,
            player_id,
            parsed.rotation,
            parsed.row,
            parsed.col,
            ensemble_index=parsed.ensemble_index,
            new_ensemble=parsed.new_ensemble,
        )

    def apply_take(
        self,
        state: GameState,
        player_id: str,
        row_index: int,
        side: Side | str,
    ) -> GameState:
        """
        Take the outermost card from one end of a layout row.

        Raises:
            WrongPhaseError: If the game is finished
            NotYourTurnError: If another player is to move
            PendingCardExistsError: If the taken card has not been placed yet
            InvalidRowError: If the row index is out of range
            RowEmptyError: If the row has no cards left
        """
        try:
            self._check_turn(state, player_id)
            if state.pending_card is not None:
                raise PendingCardExistsError(
                    "Current player must place their pending card first."
                )
            layout, card = state.layout.take_from_end(row_index, validate_side(side))
        except MoveError as exc:
            logger.debug("Rejected take by %s: %s", player_id, exc)
            raise

        logger.debug("%s took %s from row %d", player_id, card.instance_id, row_index)
        return replace(
            state,
            layout=layout,
            pending_card=PendingCard(player_id=player_id, card=card),
        )

    def apply_place(
        self,
        state: GameState,
        player_id: str,
        rotation: Rotation | int,
        row: int,
        col: int,
        ensemble_index: int | None = None,
        new_ensemble: bool = False,
    ) -> GameState:
        """
        Place the pending card and pass the turn.

        Args:
            state: Current state
            player_id: Player placing
            rotation: Clockwise orientation of the card
            row: Target row on the player's board
            col: Target column on the player's board
            ensemble_index: Ensemble to extend (defaults to 0)
            new_ensemble: Start a new ensemble instead

        Returns:
            The next state; FINISHED with scores once the layout is empty

        Raises:
            WrongPhaseError: If the game is finished
            NotYourTurnError: If another player is to move
            NoPendingCardError: If this player has no card to place
            InvalidEnsembleIndexError: If the ensemble does not exist
            IllegalPlacementError: If the edges do not connect
        """
        try:
            self._check_turn(state, player_id)
            pending = state.pending_card
            if pending is None or pending.player_id != player_id:
                raise NoPendingCardError("No pending card to place for this player.")
            placed = PlacedCard(
                card=pending.card,
                row=validate_coordinate(row, "row"),
                col=validate_coordinate(col, "col"),
                rotation=validate_rotation(rotation),
            )
            board_index = state.turn_order.index(player_id)
            board = self._place_on_board(
                state.boards[board_index], placed, ensemble_index, new_ensemble
            )
        except MoveError as exc:
            logger.debug("Rejected placement by %s: %s", player_id, exc)
            raise

        boards = state.boards[:board_index] + (board,) + state.boards[board_index + 1:]
        next_state = replace(
            state,
            boards=boards,
            pending_card=None,
            current_turn_index=(state.current_turn_index + 1) % len(state.turn_order),
        )
        logger.debug(
            "%s placed %s at (%d, %d) rotated %d",
            player_id, placed.card.instance_id, placed.row, placed.col, int(placed.rotation),
        )

        if not next_state.layout.has_remaining_cards():
            return self._finish(next_state)
        return next_state

    # ── Queries ───────────────────────────────────────────────────────

    def current_player(self, state: GameState) -> str | None:
        """Player to move, or None once the game is over."""
        if state.is_finished:
            return None
        return state.current_player_id

    def valid_placements(
        self,
        boards: Sequence[PlayerBoard],
        player_id: str,
        card_code: str,
        rotation: Rotation | int,
    ) -> list[ValidPlacement]:
        return valid_placements(
            self.catalog, boards, player_id, card_code, validate_rotation(rotation)
        )

    def is_complete(self, ensemble: Ensemble | Sequence[PlacedCard]) -> bool:
        placed = ensemble.placed_cards if isinstance(ensemble, Ensemble) else ensemble
        return is_complete(self.catalog, placed)

    def connected_components(self, placed_cards: Sequence[PlacedCard]) -> list[list[PlacedCard]]:
        return connected_components(placed_cards)

    def score(self, boards: Sequence[PlayerBoard]) -> ScoreSheet:
        """Score boards as if the game ended now."""
        return compute_scores(self.catalog, boards, self.rules.size_bonus)

    # ── Helpers ───────────────────────────────────────────────────────

    def _check_turn(self, state: GameState, player_id: str) -> None:
        if state.phase != GamePhase.PLAYING:
            raise WrongPhaseError("Game is not in playing phase.")
        if player_id != state.current_player_id:
            raise NotYourTurnError("It is not this player's turn.")

    def _place_on_board(
        self,
        board: PlayerBoard,
        placed: PlacedCard,
        ensemble_index: int | None,
        new_ensemble: bool,
    ) -> PlayerBoard:
        if new_ensemble:
            return replace(
                board, ensembles=board.ensembles + (Ensemble(placed_cards=(placed,)),)
            )

        index = 0 if ensemble_index is None else ensemble_index
        if not (0 <= index < len(board.ensembles)):
            raise InvalidEnsembleIndexError(f"Invalid ensemble index {index}.")

        ensemble = board.ensembles[index]
        if not can_place(
            self.catalog,
            ensemble.placed_cards,
            placed.card.code,
            placed.rotation,
            placed.row,
            placed.col,
        ):
            raise IllegalPlacementError(
                "Invalid placement: cell occupied or connection counts do not match."
            )

        ensembles = (
            board.ensembles[:index] + (ensemble.with_card(placed),) + board.ensembles[index + 1:]
        )
        return replace(board, ensembles=ensembles)

    def _finish(self, state: GameState) -> GameState:
        sheet = self.score(state.boards)
        scores = sheet.totals
        winner = pick_winner(scores)
        logger.info("Game finished, winner %s with scores %s", winner, scores)
        return replace(
            state,
            phase=GamePhase.FINISHED,
            scores=scores,
            winner_player_id=winner,
        )
