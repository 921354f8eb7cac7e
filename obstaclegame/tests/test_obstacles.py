import pytest

from obstaclegame.game.block import BlockKind
from obstaclegame.game.connectivity import find_group
from obstaclegame.game.game import tap
from obstaclegame.game.obstacles import (
    TransitionedBoard,
    apply_obstacle_transitions,
    eligible_cells,
    group_is_removable,
    has_removable_group,
    is_eligible,
    remove_eligible,
    thawed_kind,
)
from .conftest import TEST_BOARD_CONFIGS, parse_board, render_board


def transition_and_remove(rows, x=0, y=0):
    board = parse_board(rows)
    transitioned = apply_obstacle_transitions(board, find_group(board, x, y))
    new_board, removed = remove_eligible(transitioned)
    return transitioned, new_board, removed


class TestRemovability:
    """Test the group size gate and per-block eligibility"""

    def test_group_is_removable(self):
        board = parse_board(["R R B"])
        assert group_is_removable(board, find_group(board, 0, 0))
        assert not group_is_removable(board, find_group(board, 2, 0))
        assert not group_is_removable(board, set())

    def test_normal_eligibility(self):
        board = parse_board(["R R B"])
        group = find_group(board, 0, 0)
        assert is_eligible(board, group, 0, 0)
        assert not is_eligible(board, group, 2, 0)

    def test_counter_at_least(self):
        board = parse_board(["R R R+3", "B B G"])
        group = find_group(board, 0, 0)
        assert is_eligible(board, group, 2, 0)

        board = parse_board(["R R+3", "B G"])
        assert not is_eligible(board, find_group(board, 0, 0), 1, 0)

    def test_counter_at_most(self):
        board = parse_board(["R R-2"])
        assert is_eligible(board, find_group(board, 0, 0), 1, 0)

        board = parse_board(["R R R-2"])
        assert not is_eligible(board, find_group(board, 0, 0), 2, 0)

    @pytest.mark.parametrize("token", ["R1", "R2", "R*+2", "R*-5"])
    def test_ice_never_eligible(self, token):
        board = parse_board([f"R R {token}"])
        assert not is_eligible(board, find_group(board, 0, 0), 2, 0)

    def test_eligible_cells_empty_for_single(self):
        board = parse_board(["R B"])
        assert eligible_cells(board, find_group(board, 0, 0)) == set()

    def test_thawed_kind_table(self):
        assert thawed_kind(BlockKind.ICE_LV2) is BlockKind.ICE_LV1
        assert thawed_kind(BlockKind.ICE_LV1) is BlockKind.NORMAL
        assert thawed_kind(BlockKind.ICE_COUNTER_AT_LEAST) is BlockKind.COUNTER_AT_LEAST
        assert thawed_kind(BlockKind.ICE_COUNTER_AT_MOST) is BlockKind.COUNTER_AT_MOST
        for kind in (BlockKind.NORMAL, BlockKind.ROCK, BlockKind.ANCHOR, BlockKind.COUNTER_AT_MOST):
            assert thawed_kind(kind) is None


class TestIceTransitions:
    """Test ice thawing next to removed blocks"""

    def test_lv1_thaws_to_normal(self):
        board = parse_board(["R R1"])
        transitioned = apply_obstacle_transitions(board, find_group(board, 0, 0))

        assert render_board(transitioned.board) == ["R R"]
        assert transitioned.changed == [(1, 0)]
        assert render_board(board) == ["R R1"]

    def test_thawed_lv1_removed_same_tap(self):
        _, new_board, removed = transition_and_remove(["R R1"])
        assert removed == [(0, 0), (1, 0)]
        assert render_board(new_board) == [". ."]

    def test_lv2_drops_one_level_only(self):
        transitioned, new_board, removed = transition_and_remove(["R R R2"])
        assert render_board(transitioned.board) == ["R R R1"]
        assert removed == [(0, 0), (1, 0)]
        assert render_board(new_board) == [". . R1"]

    def test_mixed_ice_row(self):
        _, new_board, removed = transition_and_remove(["R R1 R2", "B B B"])
        assert removed == [(0, 0), (1, 0)]
        assert render_board(new_board) == [". . R1", "B B B"]

    def test_mixed_ice_row_full_tap(self):
        result = tap(parse_board(["R R1 R2", "B B B"]), 0, 0)
        assert render_board(result.board) == [". . R1", "B B B"]
        assert result.score == 4
        assert sorted(result.transitioned) == [(1, 0), (2, 0)]

    def test_ice_only_group_does_nothing(self):
        transitioned, new_board, removed = transition_and_remove(["R1 R1", "B G"])
        assert transitioned.changed == []
        assert removed == []
        assert render_board(new_board) == ["R1 R1", "B G"]

    def test_ice_needs_same_color_neighbour_in_removal(self):
        # the lv1 block touches the removed blues, not the reds
        transitioned, new_board, _ = transition_and_remove(["B B", "R R1"], 0, 0)
        assert transitioned.changed == []
        assert render_board(new_board) == [". .", "R R1"]

    def test_single_block_tap_changes_nothing(self):
        transitioned, _, removed = transition_and_remove(["R B1", "B B"])
        assert transitioned.changed == []
        assert removed == []


class TestCounterTransitions:
    """Test counter gating and ice-wrapped counters"""

    def test_counter_at_least_in_large_group(self):
        _, new_board, removed = transition_and_remove(["R R R R R+3"])
        assert len(removed) == 5
        assert new_board.is_empty()

    def test_counter_at_least_survives_small_group(self):
        _, new_board, removed = transition_and_remove(["R R+3", "B G"])
        assert removed == [(0, 0)]
        assert render_board(new_board) == [". R+3", "B G"]

    def test_counter_at_most_survives_large_group(self):
        _, new_board, removed = transition_and_remove(["R R R-2"])
        assert removed == [(0, 0), (1, 0)]
        assert render_board(new_board) == [". . R-2"]

    def test_wrapped_counter_sheds_and_is_removed(self):
        transitioned, new_board, removed = transition_and_remove(["R R R*+3"])
        assert transitioned.changed == [(2, 0)]
        assert removed == [(0, 0), (1, 0), (2, 0)]
        assert new_board.is_empty()

    def test_wrapped_counter_sheds_and_stays(self):
        _, new_board, removed = transition_and_remove(["R R*+3"])
        assert removed == [(0, 0)]
        assert render_board(new_board) == [". R+3"]

    def test_wrapped_at_most_counter(self):
        _, new_board, _ = transition_and_remove(["R R R R*-2"])
        assert render_board(new_board) == [". . . R-2"]


class TestRemoveEligible:
    """Test the removal step"""

    def test_rejects_raw_board(self):
        board = parse_board(["R R"])
        with pytest.raises(TypeError):
            remove_eligible(board)

    def test_input_untouched(self):
        board = parse_board(["R R1"])
        transitioned = apply_obstacle_transitions(board, find_group(board, 0, 0))
        remove_eligible(transitioned)

        assert render_board(transitioned.board) == ["R R"]
        assert render_board(board) == ["R R1"]

    def test_transitioned_board_is_frozen(self):
        board = parse_board(["R R"])
        transitioned = apply_obstacle_transitions(board, find_group(board, 0, 0))
        assert isinstance(transitioned, TransitionedBoard)
        with pytest.raises(AttributeError):
            transitioned.group = frozenset()


class TestHasRemovableGroup:
    """Test the board-wide move check"""

    def test_singles_only(self):
        assert not has_removable_group(parse_board(TEST_BOARD_CONFIGS["singles_only"]))

    def test_with_group(self):
        assert has_removable_group(parse_board(TEST_BOARD_CONFIGS["mixed_3x3"]))

    def test_unmet_counters_and_ice(self):
        assert not has_removable_group(parse_board(["R+3 R+3", "B1 B2"]))
        assert has_removable_group(parse_board(["R+3 R+3", "B1 B"]))
