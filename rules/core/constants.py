# rules/core/constants.py

# --- Board Dimensions ---
ROWS = 6
COLUMNS = 7
# Height includes a sentinel row to prevent bit-shift overflows
HEIGHT = ROWS + 1
MAX_MOVES = ROWS * COLUMNS

U64_MAX = (1 << 64) - 1

# --- Packed Layout ---
# Column c owns bits [7c, 7c+6]. Bit 7c+6 is the sentinel: it is never a real cell.
TOP_ROW_MASK = sum(1 << (c * HEIGHT + ROWS) for c in range(COLUMNS))  # 283691315109952

# Bit index where the next disc of each column lands on an empty board
INITIAL_NEXT_SLOT = tuple(c * HEIGHT for c in range(COLUMNS))  # (0, 7, 14, 21, 28, 35, 42)

# --- Win Detection ---
# Grid step between neighbouring cells along each line direction
VERTICAL = 1
HORIZONTAL = HEIGHT
DIAGONAL_DOWN = HEIGHT - 1
DIAGONAL_UP = HEIGHT + 1
WIN_DIRECTIONS = (VERTICAL, HORIZONTAL, DIAGONAL_DOWN, DIAGONAL_UP)
