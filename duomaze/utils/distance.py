"""Distance calculations for the maze grid."""


def manhattan_distance(col1: int, row1: int, col2: int, row2: int) -> int:
    """Calculate Manhattan distance between two cells.

    Manhattan distance is the sum of absolute coordinate differences. In maze
    terms it is the fewest single-cell orthogonal steps between two cells on an
    open grid, ignoring walls.

    Args:
        col1: Column of first cell
        row1: Row of first cell
        col2: Column of second cell
        row2: Row of second cell

    Returns:
        Manhattan distance between the two cells

    Examples:
        >>> manhattan_distance(1, 1, 4, 5)
        7
        >>> manhattan_distance(3, 3, 3, 3)
        0
    """
    return abs(col2 - col1) + abs(row2 - row1)
