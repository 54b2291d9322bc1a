"""Maze grid container with flat row-major storage."""

from dataclasses import dataclass, field
from typing import Iterator, List

from .tile import TileVariant


@dataclass(frozen=True)
class Coordinate:
    """Grid address as (col, row). Value type, used only for indexing."""

    col: int
    row: int

    def offset(self, dcol: int, drow: int) -> "Coordinate":
        """Return the coordinate shifted by (dcol, drow)."""
        return Coordinate(self.col + dcol, self.row + drow)


@dataclass
class Grid:
    """Fixed-size 2D array of tile variants.

    Tiles are stored in a flat list addressed by ``row * width + col``. A new
    grid is solid wall; the maze generator carves it into shape.
    """

    width: int
    height: int
    tiles: List[TileVariant] = field(default_factory=list)

    def __post_init__(self):
        """Validate dimensions and fill missing tiles with walls."""
        if self.width < 3 or self.height < 3:
            raise ValueError(
                f"Invalid grid size: {self.width}x{self.height} (must be at least 3x3)"
            )
        if not self.tiles:
            self.tiles = [TileVariant.WALL] * (self.width * self.height)
        elif len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"Invalid tile count: {len(self.tiles)} "
                f"(expected {self.width * self.height})"
            )

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.col < self.width and 0 <= coord.row < self.height

    def is_interior(self, coord: Coordinate) -> bool:
        """True if the cell lies strictly inside the border ring."""
        return 0 < coord.col < self.width - 1 and 0 < coord.row < self.height - 1

    def is_border(self, coord: Coordinate) -> bool:
        return self.in_bounds(coord) and not self.is_interior(coord)

    def index(self, coord: Coordinate) -> int:
        if not self.in_bounds(coord):
            raise ValueError(
                f"Coordinate ({coord.col}, {coord.row}) outside "
                f"{self.width}x{self.height} grid"
            )
        return coord.row * self.width + coord.col

    def tile_at(self, coord: Coordinate) -> TileVariant:
        return self.tiles[self.index(coord)]

    def set_tile(self, coord: Coordinate, tile: TileVariant) -> None:
        self.tiles[self.index(coord)] = tile

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield Coordinate(col, row)

    def count(self, tile: TileVariant) -> int:
        return self.tiles.count(tile)

    def rows(self) -> List[List[TileVariant]]:
        """Return tiles as a list of rows (copy) for rendering."""
        return [
            self.tiles[row * self.width : (row + 1) * self.width]
            for row in range(self.height)
        ]
