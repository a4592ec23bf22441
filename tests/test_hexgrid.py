"""Tests for hex board geometry."""

from collections import deque

import pytest

from src.engine.hexgrid import HexGrid, HexLayout
from src.utils.distance import hex_distance, offset_to_cube

ALL_LAYOUTS = list(HexLayout)


def bfs_distances(grid: HexGrid, start: tuple[int, int]) -> dict[tuple[int, int], int]:
    """Step counts from start to every reachable cell."""
    seen = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in grid.neighbors(*current):
            if neighbor not in seen:
                seen[neighbor] = seen[current] + 1
                queue.append(neighbor)
    return seen


def test_corner_neighbors_odd_r():
    """Corner (0, 0) has only two neighbors on an odd-r board."""
    grid = HexGrid(8, 8)
    assert sorted(grid.neighbors(0, 0)) == [(0, 1), (1, 0)]


def test_interior_neighbors_odd_row():
    """Odd rows are shoved right, so their diagonal neighbors lean right."""
    grid = HexGrid(8, 8)
    assert sorted(grid.neighbors(1, 1)) == [(0, 1), (0, 2), (1, 0), (1, 2), (2, 1), (2, 2)]


def test_interior_neighbors_even_row():
    """Even rows have diagonal neighbors leaning left."""
    grid = HexGrid(8, 8)
    assert sorted(grid.neighbors(2, 2)) == [(1, 1), (1, 2), (2, 1), (2, 3), (3, 1), (3, 2)]


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
def test_neighbors_are_at_distance_one(layout):
    """Every neighbor is exactly one step away, and interior cells have six."""
    grid = HexGrid(6, 6, layout)
    for row in range(6):
        for col in range(6):
            neighbors = grid.neighbors(row, col)
            assert (row, col) not in neighbors
            assert len(set(neighbors)) == len(neighbors)
            for neighbor in neighbors:
                assert grid.distance((row, col), neighbor) == 1
            if 0 < row < 5 and 0 < col < 5:
                assert len(neighbors) == 6


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
def test_neighbors_are_symmetric(layout):
    """If b neighbors a then a neighbors b."""
    grid = HexGrid(5, 5, layout)
    for row in range(5):
        for col in range(5):
            for neighbor in grid.neighbors(row, col):
                assert (row, col) in grid.neighbors(*neighbor)


def test_neighbors_skip_invalid_cells():
    """Invalid cells are never returned as neighbors."""
    grid = HexGrid(8, 8, invalid=frozenset({(0, 1)}))
    assert grid.neighbors(0, 0) == [(1, 0)]
    assert not grid.is_valid(0, 1)
    assert grid.in_bounds(0, 1)


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
def test_distance_metric_properties(layout):
    """Identity, symmetry and triangle inequality hold on every cell triple."""
    grid = HexGrid(4, 4, layout)
    cells = [(r, c) for r in range(4) for c in range(4)]
    for a in cells:
        assert grid.distance(a, a) == 0
        for b in cells:
            d_ab = grid.distance(a, b)
            assert d_ab == grid.distance(b, a)
            if a != b:
                assert d_ab > 0
            for c in cells:
                assert grid.distance(a, c) <= d_ab + grid.distance(b, c)


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
def test_distance_matches_step_count(layout):
    """Hex distance equals shortest path length on an open board."""
    grid = HexGrid(7, 7, layout)
    for start in [(0, 0), (3, 3), (6, 1), (2, 5)]:
        steps = bfs_distances(grid, start)
        for cell, count in steps.items():
            assert grid.distance(start, cell) == count


def test_distance_examples():
    """Known distances on the default odd-r board."""
    assert hex_distance(0, 0, 0, 3) == 3
    assert hex_distance(0, 0, 2, 1) == 2
    assert hex_distance(0, 0, 7, 7) == 11
    assert hex_distance(3, 3, 3, 5) == 2


def test_offset_to_cube_sums_to_zero():
    for layout in ("odd-r", "even-r", "odd-q", "even-q"):
        for row in range(5):
            for col in range(5):
                assert sum(offset_to_cube(row, col, layout)) == 0


def test_offset_to_cube_rejects_unknown_layout():
    with pytest.raises(ValueError, match="Unknown hex layout"):
        offset_to_cube(0, 0, "diamond")


def test_is_adjacent_to_any():
    grid = HexGrid(8, 8)
    assert grid.is_adjacent_to_any(2, 1, [(1, 0), (7, 7)])
    assert not grid.is_adjacent_to_any(5, 5, [(1, 0), (7, 7)])
    assert not grid.is_adjacent_to_any(2, 1, [])


def test_invalid_board_size():
    with pytest.raises(ValueError):
        HexGrid(0, 8)
