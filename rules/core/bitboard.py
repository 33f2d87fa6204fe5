# rules/core/bitboard.py
from typing import List, Sequence
from .constants import ROWS, COLUMNS, HEIGHT, TOP_ROW_MASK, WIN_DIRECTIONS


def cell_bit(column: int, row: int) -> int:
    """Bit index of (column, row), row 0 being the bottom."""
    return column * HEIGHT + row


def is_sentinel(slot: int) -> bool:
    return (TOP_ROW_MASK >> slot) & 1 == 1


def has_won(bits: int) -> bool:
    """
    Checks whether 'bits' holds four aligned discs along any direction.

    m = b & (b >> s) marks cells that have a neighbour at step s.
    m & (m >> 2s) then marks cells that start a run of four.
    The dead sentinel bit of each lane stops horizontal runs from wrapping
    between columns.
    """
    for shift in WIN_DIRECTIONS:
        m = bits & (bits >> shift)
        if m & (m >> (2 * shift)):
            return True
    return False


def popcount(bits: int) -> int:
    return bin(bits).count("1")


def to_grid(board: Sequence[int]) -> List[List[int]]:
    """
    Converts [bits_p1, bits_p2] to a 2D matrix (Row 0=Top).
    Values: 0=Empty, 1=Player1, 2=Player2
    """
    grid = [[0 for _ in range(COLUMNS)] for _ in range(ROWS)]
    for c in range(COLUMNS):
        for row in range(ROWS):
            bit = 1 << cell_bit(c, row)
            r = (ROWS - 1) - row
            if board[0] & bit:
                grid[r][c] = 1
            elif board[1] & bit:
                grid[r][c] = 2
    return grid


# --- Formatting ---

def render(board: Sequence[int]) -> str:
    """Generates an ASCII grid representation."""
    symbols = {0: ".", 1: "X", 2: "O"}
    grid = to_grid(board)
    header = " " + " ".join([str(i) for i in range(COLUMNS)])
    rows_str = []
    for r in range(ROWS):
        row_cells = [symbols[grid[r][c]] for c in range(COLUMNS)]
        rows_str.append("|" + "|".join(row_cells) + "|")
    return header + "\n" + "\n".join(rows_str)


def describe(board: Sequence[int]) -> str:
    """
    Describes the board column by column, listing pieces from Bottom to Top.
    Example: 'Column 0: P1, P2'
    """
    lines = []
    for c in range(COLUMNS):
        pieces = []
        for row in range(ROWS):
            bit = 1 << cell_bit(c, row)
            if board[0] & bit:
                pieces.append("P1")
            elif board[1] & bit:
                pieces.append("P2")
            else:
                break  # Stop at first empty space

        desc = ", ".join(pieces) if pieces else "Empty"
        lines.append(f"Column {c}: {desc}")
    return "\n".join(lines)
