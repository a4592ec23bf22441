"""Distance calculations for the hex board.

Boards are stored in offset coordinates (row, col). Distance is computed by
converting to cube coordinates, where hex distance is the Chebyshev
distance max(|dx|, |dy|, |dz|).
"""


def offset_to_cube(row: int, col: int, layout: str = "odd-r") -> tuple[int, int, int]:
    """Convert offset coordinates to cube coordinates.

    Args:
        row: Row index
        col: Column index
        layout: "odd-r" / "even-r" (pointy-top, shifted rows) or
            "odd-q" / "even-q" (flat-top, shifted columns)

    Returns:
        (x, y, z) with x + y + z == 0

    Examples:
        >>> offset_to_cube(0, 0)
        (0, 0, 0)
        >>> offset_to_cube(1, 0)  # odd row shoved right
        (0, -1, 1)
    """
    if layout == "odd-r":
        x = col - (row - (row & 1)) // 2
        z = row
    elif layout == "even-r":
        x = col - (row + (row & 1)) // 2
        z = row
    elif layout == "odd-q":
        x = col
        z = row - (col - (col & 1)) // 2
    elif layout == "even-q":
        x = col
        z = row - (col + (col & 1)) // 2
    else:
        raise ValueError(f"Unknown hex layout: {layout}")
    return (x, -x - z, z)


def cube_distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    """Chebyshev distance between two cube coordinates."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]), abs(a[2] - b[2]))


def hex_distance(r1: int, c1: int, r2: int, c2: int, layout: str = "odd-r") -> int:
    """Calculate the exact hex distance between two offset cells.

    This is the number of single-hex steps on an unobstructed board, not a
    Euclidean approximation.

    Examples:
        >>> hex_distance(0, 0, 0, 3)
        3
        >>> hex_distance(0, 0, 2, 1)  # diagonal steps cover both axes
        2
    """
    return cube_distance(offset_to_cube(r1, c1, layout), offset_to_cube(r2, c2, layout))
