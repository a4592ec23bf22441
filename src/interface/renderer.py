"""ASCII board rendering.

This module renders the hex board as text. Rows are printed top to
bottom; in row-offset layouts the shoved rows are indented by half a cell
so neighbors line up diagonally as they do on the hex board.
"""

from ..models.cell import Cell
from ..models.match import MatchState

# One-letter unit glyphs by template id
UNIT_LETTERS = {
    "warrior": "W",
    "mage": "M",
    "tank": "T",
    "assassin": "A",
    "healer": "H",
}

CELL_SEPARATOR = "  "
HALF_CELL = "  "


class BoardRenderer:
    """Renders the hex board as ASCII art."""

    def render(self, match: MatchState) -> str:
        """Render the board.

        Output format (8x8 odd-r board, 2 chars per cell):
        ..  1.  1.  ..  ..  ..  ..  ..
          1.  1W  ..  ..  ..  ..  ..  ..
        ...

        Legend:
        - '..' = unclaimed cell
        - '1.' / '2.' = empty territory of p1 / p2
        - '1W' = p1 unit (W warrior, M mage, T tank, A assassin, H healer)
        - '  ' = cell outside the playable board

        Args:
            match: Match whose board to render

        Returns:
            Multi-line ASCII art string representing the board
        """
        lines = []
        for row_index, row in enumerate(match.grid):
            line = CELL_SEPARATOR.join(self._render_cell(cell) for cell in row)
            lines.append(self._indent(match.layout, row_index) + line)
        return "\n".join(lines)

    def _render_cell(self, cell: Cell) -> str:
        """Render a single cell as two characters."""
        if not cell.valid:
            return "  "
        if cell.occupant is not None:
            unit = cell.occupant
            letter = UNIT_LETTERS.get(unit.template.id, unit.template.id[:1].upper())
            return f"{unit.owner[-1]}{letter}"
        if cell.owner is not None:
            return f"{cell.owner[-1]}."
        return ".."

    def _indent(self, layout: str, row: int) -> str:
        shoved = (layout == "odd-r" and row % 2 == 1) or (layout == "even-r" and row % 2 == 0)
        return HALF_CELL if shoved else ""

    def render_with_coords(self, match: MatchState) -> str:
        """Render the board with row and column labels.

        Args:
            match: Match whose board to render

        Returns:
            Board with coordinate labels on the edges
        """
        board = self.render(match)
        stride = 2 + len(CELL_SEPARATOR)
        # Column labels line up with row 0
        header = "   " + self._indent(match.layout, 0) + "".join(
            f"{col:<{stride}d}" for col in range(match.cols)
        ).rstrip()

        numbered = [f"{row:2d} {line}" for row, line in enumerate(board.split("\n"))]
        return header + "\n" + "\n".join(numbered)
