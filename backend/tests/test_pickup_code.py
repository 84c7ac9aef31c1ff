# tests/test_pickup_code.py
from packtrack.services.pickup_code import GRID_SIZE, generate_pattern, in_finder, pin_seed, render_svg


def test_seed_is_digit_sum():
    assert pin_seed("847291") == 31
    assert pin_seed("12-3a") == 6
    assert pin_seed("") == 0


def test_pattern_is_deterministic():
    assert generate_pattern("847291") == generate_pattern("847291")
    assert len(generate_pattern("847291")) == GRID_SIZE
    assert all(len(row) == GRID_SIZE for row in generate_pattern("847291"))


def test_same_digit_sum_same_pattern():
    assert generate_pattern("123") == generate_pattern("321")


def test_finder_blocks():
    grid = generate_pattern("0000")
    for top, left in ((0, 0), (0, 14), (14, 0)):
        # Outer border filled, ring inside empty, 3x3 core filled
        assert all(grid[top][left + c] for c in range(7))
        assert all(grid[top + r][left] for r in range(7))
        assert not grid[top + 1][left + 1]
        assert not grid[top + 1][left + 3]
        assert all(grid[top + r][left + c] for r in range(2, 5) for c in range(2, 5))
    assert not in_finder(14, 14)


def test_data_cells():
    grid = generate_pattern("847291")
    seed = 31
    assert grid[10][10] == ((10 * 13 + 10 * 7 + seed) % 3 != 0)
    assert grid[7][20] == ((7 * 13 + 20 * 7 + seed) % 3 != 0)


def test_svg():
    svg = render_svg("847291", cell_size=4)
    assert svg.startswith("<svg")
    assert 'width="84"' in svg
    assert svg.count("<rect") == 1 + sum(sum(row) for row in generate_pattern("847291"))
