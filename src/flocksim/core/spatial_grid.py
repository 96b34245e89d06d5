"""
Square-cell bucket index for neighbor lookup in the 2D domain.
"""

import math
from typing import Callable, Iterator, List, Tuple

import pygame

from .config import InvalidConfiguration


class GridCell:
    """
    One bucket of the grid.

    Holds the indices of the agents whose latest position maps to this cell,
    in insertion order.
    """

    def __init__(self, i: int, j: int, side: float):
        """
        Initialize a cell.

        Args:
            i: Column index (x axis)
            j: Row index (y axis)
            side: Cell side length
        """
        self.i = i
        self.j = j
        self.xmin = i * side
        self.xmax = (i + 1) * side
        self.ymin = j * side
        self.ymax = (j + 1) * side
        self.members: List[int] = []

    def contains(self, x: float, y: float) -> bool:
        """Whether a point lies in the cell's half-open bounding box."""
        return self.xmin <= x < self.xmax and self.ymin <= y < self.ymax

    def __len__(self) -> int:
        return len(self.members)


class SpatialGrid:
    """
    Spatial bucket grid over a square domain.

    The domain is split into num_cells x num_cells cells whose side is at least
    the reference vision radius, so agents with that radius only need the 3x3
    block around their own cell. Cell lookup wraps toroidally on indices, even
    when the boundary itself is not periodic.
    """

    def __init__(self, reference_radius: float, domain_length: float):
        """
        Initialize the grid.

        Args:
            reference_radius: Vision radius the cell size is built around
            domain_length: Side of the square domain

        Raises:
            InvalidConfiguration: If the radius is not in (0, domain_length]
        """
        if reference_radius <= 0 or reference_radius > domain_length:
            raise InvalidConfiguration(
                f"reference radius must be in (0, {domain_length}], got {reference_radius}"
            )
        self.domain_length = domain_length
        self.num_cells = max(1, int(math.floor(domain_length / reference_radius)))
        self.cell_size = domain_length / self.num_cells
        self.cells = [
            [GridCell(i, j, self.cell_size) for j in range(self.num_cells)]
            for i in range(self.num_cells)
        ]

    def cell_of(self, position: pygame.Vector2) -> Tuple[int, int]:
        """
        Convert a position to cell indices.

        Args:
            position: Position in world coordinates

        Returns:
            Tuple of (i, j) cell indices
        """
        n = self.num_cells
        i = (int(math.floor(position.x / self.cell_size)) + n) % n
        j = (int(math.floor(position.y / self.cell_size)) + n) % n
        return i, j

    def cell(self, i: int, j: int) -> GridCell:
        return self.cells[i][j]

    def insert(self, position: pygame.Vector2, index: int) -> None:
        """
        Add an agent index to the cell its position maps to.

        Args:
            position: Latest position of the agent
            index: Agent index
        """
        i, j = self.cell_of(position)
        self.cells[i][j].members.append(index)

    def remove(self, position: pygame.Vector2, index: int) -> None:
        """Remove an agent index from the cell its position maps to."""
        i, j = self.cell_of(position)
        self.cells[i][j].members.remove(index)

    def reindex(self, position_of: Callable[[int], pygame.Vector2]) -> int:
        """
        Move every agent whose latest position has left its cell.

        Each bucket is scanned in full first, the movers are then dropped from
        it, and only afterwards reinserted into their new cells.

        Args:
            position_of: Lookup from agent index to latest position

        Returns:
            Number of agents that changed cell
        """
        moved = 0
        for i, j, cell in self._cells_row_major():
            leaving = [idx for idx in cell.members if self.cell_of(position_of(idx)) != (i, j)]
            if not leaving:
                continue
            leaving_set = set(leaving)
            cell.members = [idx for idx in cell.members if idx not in leaving_set]
            for idx in leaving:
                self.insert(position_of(idx), idx)
            moved += len(leaving)
        return moved

    def window_cells(self, ci: int, cj: int, ring_radius: int) -> List[Tuple[int, int]]:
        """
        Cells of the (2r+1) x (2r+1) block centred on a cell.

        Indices wrap around the grid; a cell reached twice (block wider than
        the grid) is listed once.

        Args:
            ci: Centre column
            cj: Centre row
            ring_radius: Number of cell rings around the centre

        Returns:
            Ordered list of (i, j) cell indices
        """
        n = self.num_cells
        seen = set()
        block = []
        for di in range(-ring_radius, ring_radius + 1):
            for dj in range(-ring_radius, ring_radius + 1):
                key = ((ci + di) % n, (cj + dj) % n)
                if key not in seen:
                    seen.add(key)
                    block.append(key)
        return block

    def neighbors_window(self, ci: int, cj: int, ring_radius: int) -> List[int]:
        """
        Agent indices in the block of cells around (ci, cj).

        Args:
            ci: Centre column
            cj: Centre row
            ring_radius: Number of cell rings around the centre

        Returns:
            Agent indices, in deterministic cell-then-insertion order
        """
        indices = []
        for i, j in self.window_cells(ci, cj, ring_radius):
            indices.extend(self.cells[i][j].members)
        return indices

    def iter_cells(self) -> Iterator[Tuple[Tuple[int, int], GridCell]]:
        """Yield ((i, j), cell) in row-major order."""
        for i, j, cell in self._cells_row_major():
            yield (i, j), cell

    def _cells_row_major(self) -> Iterator[Tuple[int, int, GridCell]]:
        for i, column in enumerate(self.cells):
            for j, cell in enumerate(column):
                yield i, j, cell

    def __len__(self) -> int:
        return sum(len(cell) for _, _, cell in self._cells_row_major())
