"""
Assemblage - Move Payloads

Pydantic models for the two moves a player can submit. Payloads may use
snake_case or the camelCase keys sent by browser clients
(``rowIndex``, ``newEnsemble``, ``ensembleIndex``).
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from assemblage.engine.base import Rotation, Side
from assemblage.engine.errors import InvalidMoveError


class _MoveModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class TakeMove(_MoveModel):
    """Take the outermost card from one end of a layout row."""

    type: Literal["take"] = "take"
    row_index: int
    side: Side


class PlaceMove(_MoveModel):
    """Place the pending card on the mover's board."""

    type: Literal["place"] = "place"
    rotation: Rotation = Rotation.R0
    row: int
    col: int
    new_ensemble: bool = False
    ensemble_index: int | None = None


Move = Annotated[Union[TakeMove, PlaceMove], Field(discriminator="type")]

_move_adapter: TypeAdapter[TakeMove | PlaceMove] = TypeAdapter(Move)


def parse_move(data: Any) -> TakeMove | PlaceMove:
    """
    Validate a raw move payload.

    Args:
        data: A TakeMove/PlaceMove instance or a dict with a "type" key

    Returns:
        The validated move model

    Raises:
        InvalidMoveError: If the payload is malformed
    """
    if isinstance(data, (TakeMove, PlaceMove)):
        return data
    try:
        return _move_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidMoveError(f"Malformed move: {exc.errors()[0]['msg']}") from exc
