"""
Assemblage - End-of-Game Scoring

Scoring rules:
- Each ensemble is worth the sum of its card values
- Complete ensembles add their value, incomplete ones subtract it
- The player(s) owning the largest complete ensemble split the size bonus
  (floor division, remainder dropped). No bonus if nobody completed anything.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence

from assemblage.engine.base import PlayerBoard
from assemblage.engine.catalog import CardCatalog
from assemblage.engine.ensembles import is_complete


@dataclass(frozen=True)
class EnsembleScore:
    """
    Scoring of a single ensemble.

    Attributes:
        ensemble_index: Position on the player's board
        size: Number of cards
        points: Sum of card values
        is_complete: Whether every dotted edge is matched
    """
    ensemble_index: int
    size: int
    points: int
    is_complete: bool

    @property
    def signed_points(self) -> int:
        return self.points if self.is_complete else -self.points


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Complete scoring result for one player.

    Attributes:
        player_id: Player scored
        ensembles: Per-ensemble results
        bonus: Share of the size bonus awarded
    """
    player_id: str
    ensembles: tuple[EnsembleScore, ...]
    bonus: int = 0

    @property
    def ensemble_total(self) -> int:
        return sum(e.signed_points for e in self.ensembles)

    @property
    def total(self) -> int:
        return self.ensemble_total + self.bonus

    @property
    def largest_complete_size(self) -> int:
        return max((e.size for e in self.ensembles if e.is_complete), default=0)

    def __str__(self) -> str:
        lines = [f"{self.player_id}: {self.total} points"]
        for item in self.ensembles:
            state = "complete" if item.is_complete else "incomplete"
            lines.append(
                f"  - ensemble {item.ensemble_index} ({item.size} cards, {state}): "
                f"{item.signed_points:+d}"
            )
        if self.bonus:
            lines.append(f"  - size bonus: +{self.bonus}")
        return "\n".join(lines)


@dataclass(frozen=True)
class ScoreSheet:
    """
    Final scores for every player, in board order.

    Attributes:
        breakdowns: One breakdown per player
    """
    breakdowns: tuple[ScoreBreakdown, ...]

    @property
    def totals(self) -> dict[str, int]:
        return {b.player_id: b.total for b in self.breakdowns}

    def for_player(self, player_id: str) -> ScoreBreakdown:
        for breakdown in self.breakdowns:
            if breakdown.player_id == player_id:
                return breakdown
        raise KeyError(player_id)


def score_board(catalog: CardCatalog, board: PlayerBoard) -> ScoreBreakdown:
    """Score one board without the size bonus."""
    ensembles = tuple(
        EnsembleScore(
            ensemble_index=index,
            size=len(ensemble),
            points=ensemble.points,
            is_complete=is_complete(catalog, ensemble.placed_cards),
        )
        for index, ensemble in enumerate(board.ensembles)
        if len(ensemble) > 0
    )
    return ScoreBreakdown(player_id=board.player_id, ensembles=ensembles)


def compute_scores(
    catalog: CardCatalog,
    boards: Sequence[PlayerBoard],
    size_bonus: int = 50,
) -> ScoreSheet:
    """
    Score every board and award the shared size bonus.

    Args:
        catalog: Card geometry source
        boards: All player boards
        size_bonus: Bonus split among owners of the largest complete ensemble

    Returns:
        ScoreSheet with one breakdown per board
    """
    breakdowns = [score_board(catalog, board) for board in boards]

    best_size = max((b.largest_complete_size for b in breakdowns), default=0)
    if best_size > 0:
        winners = [i for i, b in enumerate(breakdowns) if b.largest_complete_size == best_size]
        share = size_bonus // len(winners)
        for i in winners:
            b = breakdowns[i]
            breakdowns[i] = ScoreBreakdown(player_id=b.player_id, ensembles=b.ensembles, bonus=share)

    return ScoreSheet(breakdowns=tuple(breakdowns))


def pick_winner(scores: Mapping[str, int]) -> str | None:
    """
    Highest-scoring player.

    Ties go to the player listed first in ``scores`` (stable sort), so callers
    that need to report a shared win must inspect the scores themselves.
    """
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return ranked[0][0] if ranked else None
