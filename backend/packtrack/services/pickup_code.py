"""
Placeholder pickup code drawn from a PIN.

Not a scannable code: a 21x21 grid with three corner finder blocks and the
remaining cells filled from the digit sum of the PIN, so the same PIN always
draws the same picture.
"""
from typing import List

GRID_SIZE = 21
FINDER_SIZE = 7


def pin_seed(pin: str) -> int:
    return sum(int(ch) for ch in pin if ch.isdigit())


def _finder_cell(row: int, col: int) -> bool:
    r = row if row < FINDER_SIZE else row - (GRID_SIZE - FINDER_SIZE)
    c = col if col < FINDER_SIZE else col - (GRID_SIZE - FINDER_SIZE)
    border = r in (0, FINDER_SIZE - 1) or c in (0, FINDER_SIZE - 1)
    core = 2 <= r <= 4 and 2 <= c <= 4
    return border or core


def in_finder(row: int, col: int) -> bool:
    far = GRID_SIZE - FINDER_SIZE
    top_left = row < FINDER_SIZE and col < FINDER_SIZE
    top_right = row < FINDER_SIZE and col >= far
    bottom_left = row >= far and col < FINDER_SIZE
    return top_left or top_right or bottom_left


def generate_pattern(pin: str) -> List[List[bool]]:
    seed = pin_seed(pin)
    grid = []
    for row in range(GRID_SIZE):
        cells = []
        for col in range(GRID_SIZE):
            if in_finder(row, col):
                cells.append(_finder_cell(row, col))
            else:
                cells.append((row * 13 + col * 7 + seed) % 3 != 0)
        grid.append(cells)
    return grid


def render_svg(pin: str, cell_size: int = 8) -> str:
    size = GRID_SIZE * cell_size
    rects = [
        f'<rect x="{col * cell_size}" y="{row * cell_size}" width="{cell_size}" height="{cell_size}"/>'
        for row, cells in enumerate(generate_pattern(pin))
        for col, filled in enumerate(cells)
        if filled
    ]
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}" aria-label="QR code for pickup verification">'
        f'<rect width="{size}" height="{size}" fill="#ffffff"/>'
        f'<g fill="#000000">{"".join(rects)}</g></svg>'
    )
