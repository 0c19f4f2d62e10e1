"""
Tests for the grid state.

Tests:
- Grid creation and dimension checks
- Landing row lookup
- Piece placement and drops
- Player alternation
"""

import numpy as np
import pytest

from fourinarow.game.board import (COLUMN_FULL, InvalidDimensionsError, Placement,
                                   count_empty, create_grid, drop_piece, find_landing_row,
                                   get_valid_columns, is_valid_column, place_piece,
                                   toggle_player)
from fourinarow.utils import Player


class TestCreateGrid:
    """Tests for grid creation."""

    def test_default_dimensions(self):
        """Default grid is 6 rows by 7 columns."""
        grid = create_grid()
        assert grid.shape == (6, 7)

    def test_every_cell_empty(self):
        grid = create_grid(5, 9)
        assert grid.shape == (5, 9)
        assert np.all(grid == Player.EMPTY.value)

    def test_smallest_grid_allowed(self):
        assert create_grid(4, 4).shape == (4, 4)

    def test_none_picks_defaults_per_dimension(self):
        assert create_grid(height=8).shape == (8, 7)
        assert create_grid(width=10).shape == (6, 10)

    @pytest.mark.parametrize("height,width", [(3, 7), (6, 3), (0, 7), (-1, -1)])
    def test_too_small_rejected(self, height, width):
        """Grids that cannot hold four in a row are rejected."""
        with pytest.raises(InvalidDimensionsError):
            create_grid(height, width)

    @pytest.mark.parametrize("height", [6.0, "6", True])
    def test_non_integer_rejected(self, height):
        with pytest.raises(InvalidDimensionsError):
            create_grid(height, 7)

    def test_invalid_dimensions_is_value_error(self):
        with pytest.raises(ValueError):
            create_grid(2, 2)


class TestFindLandingRow:
    """Tests for landing row lookup."""

    @pytest.mark.parametrize("height,width", [(4, 4), (6, 7), (9, 5)])
    def test_empty_column_lands_on_bottom(self, height, width):
        grid = create_grid(height, width)
        for col in range(width):
            assert find_landing_row(grid, col) == height - 1

    @pytest.mark.parametrize("height,width", [(4, 4), (6, 7), (9, 5)])
    def test_full_after_height_placements(self, height, width):
        """After height drops into one column there is no landing spot."""
        grid = create_grid(height, width)
        player = Player.ONE
        for expected_row in range(height - 1, -1, -1):
            assert find_landing_row(grid, 1) == expected_row
            assert drop_piece(grid, 1, player) == Placement(expected_row, 1)
            player = toggle_player(player)

        assert find_landing_row(grid, 1) is None

    def test_top_row_is_a_landing_spot(self, grid):
        """Row 0 is a real landing row and not mistaken for a full column."""
        for row in range(grid.shape[0] - 1, 0, -1):
            grid[row, 3] = Player.TWO.value

        assert find_landing_row(grid, 3) == 0
        placement = drop_piece(grid, 3, Player.ONE)
        assert placement is not COLUMN_FULL
        assert placement == Placement(0, 3)
        assert grid[0, 3] == Player.ONE.value

    def test_other_columns_unaffected(self, grid):
        drop_piece(grid, 2, Player.ONE)
        assert find_landing_row(grid, 1) == 5
        assert find_landing_row(grid, 2) == 4

    @pytest.mark.parametrize("column", [-1, 7, 100])
    def test_out_of_range_column(self, grid, column):
        """Negative indices do not wrap around to the other side."""
        with pytest.raises(IndexError):
            find_landing_row(grid, column)


class TestPlacePiece:
    """Tests for writing pieces into cells."""

    def test_place_in_empty_cell(self, grid):
        assert place_piece(grid, 5, 0, Player.TWO)
        assert grid[5, 0] == Player.TWO.value

    def test_never_overwrites(self, grid):
        place_piece(grid, 5, 0, Player.ONE)
        assert not place_piece(grid, 5, 0, Player.TWO)
        assert grid[5, 0] == Player.ONE.value

    def test_empty_player_rejected(self, grid):
        with pytest.raises(ValueError):
            place_piece(grid, 5, 0, Player.EMPTY)


class TestDropPiece:
    """Tests for the drop operation."""

    def test_full_column_leaves_grid_unchanged(self, grid):
        for _ in range(grid.shape[0]):
            drop_piece(grid, 4, Player.ONE)
        before = grid.copy()

        assert drop_piece(grid, 4, Player.TWO) is COLUMN_FULL
        np.testing.assert_array_equal(grid, before)

    def test_pieces_stack(self, grid):
        first = drop_piece(grid, 0, Player.ONE)
        second = drop_piece(grid, 0, Player.TWO)
        assert (first.row, second.row) == (5, 4)
        assert grid[5, 0] == Player.ONE.value
        assert grid[4, 0] == Player.TWO.value


class TestTogglePlayer:
    """Tests for player alternation."""

    @pytest.mark.parametrize("player", [Player.ONE, Player.TWO])
    def test_involution(self, player):
        assert toggle_player(player) != player
        assert toggle_player(toggle_player(player)) == player

    def test_empty_has_no_opponent(self):
        with pytest.raises(ValueError):
            toggle_player(Player.EMPTY)


class TestGridHelpers:
    """Tests for the small grid queries."""

    def test_valid_columns_skip_full(self, grid):
        for _ in range(grid.shape[0]):
            drop_piece(grid, 6, Player.ONE)
        assert get_valid_columns(grid) == [0, 1, 2, 3, 4, 5]

    def test_valid_columns_agree_with_landing_rows(self, grid):
        """An occupied top cell over empty cells does not close the column."""
        grid[0, 3] = Player.ONE.value
        assert find_landing_row(grid, 3) == 5
        assert get_valid_columns(grid) == [0, 1, 2, 3, 4, 5, 6]

    def test_count_empty(self, grid):
        assert count_empty(grid) == 42
        drop_piece(grid, 0, Player.ONE)
        assert count_empty(grid) == 41

    def test_is_valid_column(self, grid):
        assert is_valid_column(grid, 0)
        assert is_valid_column(grid, 6)
        assert not is_valid_column(grid, -1)
        assert not is_valid_column(grid, 7)
