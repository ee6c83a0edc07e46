"""
Board - The tile grid and the single-line slide algorithm.

Design principles:
- Immutable-friendly: all mutations return a new board
- Line-oriented: every move is expressed as a slide toward index 0
- Presentation-agnostic: no rendering or event binding lives here
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


DEFAULT_ROWS = 4
DEFAULT_COLUMNS = 4


class Direction(Enum):
    """Directions a move can slide the tiles."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_reversed(self) -> bool:
        """RIGHT and DOWN lines are traversed from the high-index edge."""
        return self in (Direction.RIGHT, Direction.DOWN)


def _is_tile_value(value: int) -> bool:
    # 0 is empty, anything else must be a power of two >= 2
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


def compact(line: Iterable[int]) -> list[int]:
    """Drop empty cells, keeping the order of the remaining tiles."""
    return [value for value in line if value != 0]


def slide_line(line: Sequence[int]) -> tuple[list[int], int]:
    """
    Slide one line toward index 0.

    Steps:
    1. Compact the line
    2. Merge equal neighbours left to right, each tile at most once
    3. Compact again and pad with zeros to the original length

    Returns (new line, score gained by the merges).
    """
    tiles = compact(line)
    gained = 0

    i = 0
    while i < len(tiles) - 1:
        if tiles[i] == tiles[i + 1]:
            tiles[i] *= 2
            tiles[i + 1] = 0
            gained += tiles[i]
            # Skip the partner so the produced tile cannot merge again
            i += 2
        else:
            i += 1

    tiles = compact(tiles)
    tiles.extend([0] * (len(line) - len(tiles)))
    return tiles, gained


@dataclass(frozen=True)
class Board:
    """
    A rows x columns grid of tile values.

    Cells are stored row-major as a tuple of tuples so a board
    can be shared freely without copying.
    """
    cells: tuple[tuple[int, ...], ...]

    def __post_init__(self):
        if not self.cells or not self.cells[0]:
            raise ValueError("Board must have at least one row and one column")
        width = len(self.cells[0])
        for row in self.cells:
            if len(row) != width:
                raise ValueError("Board rows must all have the same length")
            for value in row:
                if not _is_tile_value(value):
                    raise ValueError(f"Invalid tile value: {value}")

    @classmethod
    def empty(cls, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS) -> Board:
        """Create a board with every cell empty."""
        return cls(cells=tuple(tuple(0 for _ in range(columns)) for _ in range(rows)))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> Board:
        """Create a board from nested lists (or any nested iterables)."""
        return cls(cells=tuple(tuple(int(v) for v in row) for row in rows))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def columns(self) -> int:
        return len(self.cells[0])

    def cell(self, row: int, column: int) -> int:
        return self.cells[row][column]

    def with_cell(self, row: int, column: int, value: int) -> Board:
        """Return new board with one cell replaced."""
        new_rows = [list(r) for r in self.cells]
        new_rows[row][column] = value
        return Board.from_rows(new_rows)

    def empty_cells(self) -> list[tuple[int, int]]:
        """Positions of empty cells in row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, value in enumerate(row)
            if value == 0
        ]

    def has_empty_cell(self) -> bool:
        return any(value == 0 for row in self.cells for value in row)

    def has_adjacent_pair(self) -> bool:
        """Check for two equal tiles side by side in any row or column."""
        for r in range(self.rows):
            for c in range(self.columns):
                value = self.cells[r][c]
                if c < self.columns - 1 and value == self.cells[r][c + 1]:
                    return True
                if r < self.rows - 1 and value == self.cells[r + 1][c]:
                    return True
        return False

    def contains(self, value: int) -> bool:
        return any(v == value for row in self.cells for v in row)

    def max_tile(self) -> int:
        return max(v for row in self.cells for v in row)

    def tile_count(self) -> int:
        return sum(1 for row in self.cells for v in row if v != 0)

    def total(self) -> int:
        return sum(v for row in self.cells for v in row)

    def line_count(self, direction: Direction) -> int:
        """Number of independent lines a move in this direction slides."""
        return self.rows if direction.is_horizontal else self.columns

    def line(self, index: int, direction: Direction) -> list[int]:
        """
        Extract a line in traversal order for the direction.

        Rows for LEFT/RIGHT, columns for UP/DOWN. RIGHT and DOWN
        lines come back reversed so sliding is always toward index 0.
        """
        if direction.is_horizontal:
            values = list(self.cells[index])
        else:
            values = [row[index] for row in self.cells]
        if direction.is_reversed:
            values.reverse()
        return values

    def with_line(self, index: int, direction: Direction, values: Sequence[int]) -> Board:
        """Return new board with a traversal-order line written back."""
        values = list(values)
        if direction.is_reversed:
            values.reverse()

        new_rows = [list(r) for r in self.cells]
        if direction.is_horizontal:
            new_rows[index] = values
        else:
            for r, value in enumerate(values):
                new_rows[r][index] = value
        return Board.from_rows(new_rows)

    def to_rows(self) -> list[list[int]]:
        """Fresh nested lists, safe for callers to mutate."""
        return [list(row) for row in self.cells]

    def clone(self) -> Board:
        return Board(cells=self.cells)

    def render(self, cell_width: int = 5) -> str:
        """Plain-text rendering, one row per line, '.' for empty cells."""
        lines = []
        for row in self.cells:
            lines.append("".join(
                (str(v) if v else ".").rjust(cell_width) for v in row
            ))
        return "\n".join(lines)
