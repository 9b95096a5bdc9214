from dataclasses import dataclass, field
from typing import Iterator, List

from .tiles import NONE, TILES

Grid = List[List[str]]


@dataclass
class LevelMap:
    """One dungeon level: a row-major tile grid plus its id and dimensions."""

    level: int
    grid: Grid = field(repr=False)
    height: int
    width: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def tile(self, row: int, col: int) -> str:
        return self.grid[row][col]

    def set_tile(self, row: int, col: int, tile: str) -> None:
        if tile not in TILES:
            raise ValueError(f"unknown tile code {tile!r}")
        self.grid[row][col] = tile

    def rows(self) -> Iterator[str]:
        for row in self.grid:
            yield "".join(row)


def new_level(height: int, width: int, level: int = 1) -> LevelMap:
    """Build a blank level of ``height`` rows by ``width`` columns."""
    if height <= 0 or width <= 0:
        raise ValueError(f"level dimensions must be positive, got {width}x{height}")
    grid = [[NONE for _ in range(width)] for _ in range(height)]
    return LevelMap(level=level, grid=grid, height=height, width=width)


__all__ = ["Grid", "LevelMap", "new_level"]
