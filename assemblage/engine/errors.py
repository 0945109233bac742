"""
Assemblage - Engine Errors

Every rejected operation raises a subclass of MoveError. Each error carries a
stable ``code`` so the calling layer can map it to a user-facing response.
"""


class MoveError(ValueError):
    """Base class for rejected operations. The input state is never modified."""

    code = "move_error"


class WrongPhaseError(MoveError):
    code = "wrong_phase"


class NotYourTurnError(MoveError):
    code = "not_your_turn"


class PendingCardExistsError(MoveError):
    code = "pending_card_exists"


class NoPendingCardError(MoveError):
    code = "no_pending_card"


class InvalidRowError(MoveError):
    code = "invalid_row"


class RowEmptyError(MoveError):
    code = "row_empty"


class InvalidEnsembleIndexError(MoveError):
    code = "invalid_ensemble_index"


class IllegalPlacementError(MoveError):
    code = "illegal_placement"


class InvalidPlayerCountError(MoveError):
    code = "invalid_player_count"


class InvalidMoveError(MoveError):
    """Raised for malformed move payloads (unknown type, bad rotation, ...)."""

    code = "invalid_move"


class CatalogError(RuntimeError):
    """Card catalog does not fit the layout. Fatal configuration error."""
