"""
Tests for ensemble placement, components and completeness.
"""

import pytest

from assemblage.engine.base import Ensemble, PlayerBoard
from assemblage.engine.ensembles import (
    ValidPlacement,
    can_place,
    connected_components,
    is_complete,
    valid_placements,
)


class TestCanPlace:
    """Tests for placement legality."""

    @pytest.mark.parametrize("rotation", [0, 90, 180, 270])
    def test_empty_ensemble_accepts_anything(self, catalog, rotation):
        assert can_place(catalog, [], "K", rotation, 5, -3)

    def test_occupied_cell(self, catalog, make_placed):
        existing = [make_placed("A", 0, 0)]
        assert not can_place(catalog, existing, "B", 0, 0, 0)

    def test_not_adjacent(self, catalog, make_placed):
        existing = [make_placed("A", 0, 0)]
        assert not can_place(catalog, existing, "B", 0, 0, -2)
        assert not can_place(catalog, existing, "B", 0, -1, -1)

    def test_matching_connection(self, catalog, make_placed):
        # A's left edge (1 dot) meets B's right edge (1 dot)
        existing = [make_placed("A", 0, 0)]
        assert can_place(catalog, existing, "B", 0, 0, -1)

    def test_count_mismatch(self, catalog, make_placed):
        existing = [make_placed("C", 0, 0, 180)]  # right edge has 2 dots
        assert not can_place(catalog, existing, "A", 0, 0, 1)
        assert can_place(catalog, existing, "C", 0, 0, 1)

    def test_rotation_changes_legality(self, catalog, make_placed):
        existing = [make_placed("A", 0, 0)]
        # A at 180 has its single dot on the right edge, facing (0, 0)
        assert can_place(catalog, existing, "A", 180, 0, -1)
        assert not can_place(catalog, existing, "A", 90, 0, -1)

    def test_zero_zero_alongside_real_connection(self, catalog, make_placed):
        existing = [make_placed("B", 0, 0), make_placed("B", 1, 1)]
        # New B at (0, 1): left 1-1 with (0, 0), bottom 0-0 with (1, 1)
        assert can_place(catalog, existing, "B", 0, 0, 1)

    def test_one_mismatched_neighbor_rejects(self, catalog, make_placed):
        existing = [make_placed("B", 0, 0), make_placed("G", 1, 1)]
        # Left matches, but G's top (1 dot) meets B's bottom (0 dots)
        assert not can_place(catalog, existing, "B", 0, 0, 1)

    def test_blank_card_against_dotted_sides(self, blank_catalog, make_placed):
        existing = [make_placed("G", 0, 0)]
        for row, col in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            assert not can_place(blank_catalog, existing, "A", 0, row, col)

    def test_zero_zero_abutment_alone_is_not_enough(self, blank_catalog, make_placed):
        existing = [make_placed("A", 0, 0)]
        assert not can_place(blank_catalog, existing, "A", 0, 0, 1)


class TestConnectedComponents:
    """Tests for component discovery."""

    def test_empty(self):
        assert connected_components([]) == []

    def test_two_groups(self, make_placed):
        a = make_placed("A", 0, 0)
        b = make_placed("B", 0, 1)
        c = make_placed("C", 5, 5)
        components = connected_components([a, c, b])
        assert [len(comp) for comp in components] == [2, 1]
        assert set(map(id, components[0])) == {id(a), id(b)}
        assert components[1] == [c]

    def test_diagonal_is_not_connected(self, make_placed):
        components = connected_components([make_placed("A", 0, 0), make_placed("A", 1, 1)])
        assert len(components) == 2

    def test_components_partition_input(self, make_placed):
        cards = [make_placed("A", r, c) for r, c in [(0, 0), (0, 1), (1, 1), (3, 3), (3, 4), (9, 9)]]
        components = connected_components(cards)
        flattened = [pc for comp in components for pc in comp]
        assert len(flattened) == len(cards)
        assert {id(pc) for pc in flattened} == {id(pc) for pc in cards}
        assert sorted(len(comp) for comp in components) == [1, 2, 3]

    def test_long_chain_does_not_recurse(self, make_placed):
        chain = [make_placed("B", 0, col) for col in range(5000)]
        components = connected_components(chain)
        assert len(components) == 1
        assert len(components[0]) == 5000


class TestIsComplete:
    """Tests for completeness."""

    def test_single_dotted_card_is_incomplete(self, catalog, make_placed):
        assert not is_complete(catalog, [make_placed("A", 0, 0)])

    def test_single_blank_card_is_complete(self, blank_catalog, make_placed):
        assert is_complete(blank_catalog, [make_placed("A", 0, 0)])

    def test_matched_pair(self, catalog, pair_ensemble):
        assert is_complete(catalog, pair_ensemble().placed_cards)

    def test_mismatched_pair(self, catalog, make_placed):
        cards = [make_placed("A", 0, 0, 180), make_placed("C", 0, 1)]
        assert not is_complete(catalog, cards)

    def test_three_card_chain(self, catalog, three_card_ensemble):
        assert is_complete(catalog, three_card_ensemble.placed_cards)

    def test_open_end_is_incomplete(self, catalog, make_placed):
        # B has dots on both sides; only the right one is matched
        cards = [make_placed("B", 0, 0), make_placed("A", 0, 1)]
        assert not is_complete(catalog, cards)

    def test_ring_of_squares(self, catalog, make_placed):
        # Four G cards in a 2 x 2 block still leave outer edges open
        cards = [make_placed("G", r, c) for r in (0, 1) for c in (0, 1)]
        assert not is_complete(catalog, cards)


class TestValidPlacements:
    """Tests for placement enumeration."""

    def test_unknown_player(self, catalog):
        assert valid_placements(catalog, [PlayerBoard("p1")], "ghost", "A", 0) == []

    def test_no_ensembles_offers_new_only(self, catalog):
        result = valid_placements(catalog, [PlayerBoard("p1")], "p1", "A", 0)
        assert result == [ValidPlacement(row=0, col=0, new_ensemble=True)]

    def test_existing_ensemble(self, catalog, make_placed):
        board = PlayerBoard("p1", ensembles=(Ensemble(placed_cards=(make_placed("A", 0, 0),)),))
        result = valid_placements(catalog, [board], "p1", "B", 0)
        assert result == [
            ValidPlacement(row=0, col=-1, ensemble_index=0),
            ValidPlacement(row=0, col=0, new_ensemble=True),
        ]

    def test_every_result_is_placeable(self, catalog, three_card_ensemble, pair_ensemble):
        board = PlayerBoard("p1", ensembles=(three_card_ensemble, pair_ensemble()))
        for code in ("A", "C", "E"):
            for rotation in (0, 90, 180, 270):
                for placement in valid_placements(catalog, [board], "p1", code, rotation):
                    if placement.new_ensemble:
                        continue
                    ensemble = board.ensembles[placement.ensemble_index]
                    assert can_place(
                        catalog, ensemble.placed_cards, code, rotation,
                        placement.row, placement.col,
                    )

    def test_complete_ensemble_accepts_nothing(self, catalog, pair_ensemble):
        board = PlayerBoard("p1", ensembles=(pair_ensemble(),))
        result = valid_placements(catalog, [board], "p1", "G", 0)
        assert result == [ValidPlacement(row=0, col=0, new_ensemble=True)]
