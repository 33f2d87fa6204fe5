import unittest
from rules.core.bitboard import cell_bit, is_sentinel, has_won, popcount, to_grid, render, describe
from rules.core.constants import TOP_ROW_MASK, INITIAL_NEXT_SLOT, HEIGHT, COLUMNS


def bits(*cells):
    """Builds a bitboard from (column, row) pairs, row 0 = bottom."""
    value = 0
    for c, r in cells:
        value |= 1 << cell_bit(c, r)
    return value


class TestLayout(unittest.TestCase):
    def test_constants(self):
        self.assertEqual(TOP_ROW_MASK, 283691315109952)
        self.assertEqual(list(INITIAL_NEXT_SLOT), [0, 7, 14, 21, 28, 35, 42])

    def test_sentinels(self):
        for c in range(COLUMNS):
            self.assertTrue(is_sentinel(c * HEIGHT + 6))
            for r in range(6):
                self.assertFalse(is_sentinel(cell_bit(c, r)))


class TestWinDetection(unittest.TestCase):
    def test_vertical(self):
        self.assertTrue(has_won(bits((0, 0), (0, 1), (0, 2), (0, 3))))
        self.assertFalse(has_won(bits((0, 0), (0, 1), (0, 2))))

    def test_horizontal(self):
        self.assertTrue(has_won(bits((3, 2), (4, 2), (5, 2), (6, 2))))
        self.assertFalse(has_won(bits((3, 2), (4, 2), (6, 2))))

    def test_diagonals(self):
        # Rising to the right
        self.assertTrue(has_won(bits((0, 0), (1, 1), (2, 2), (3, 3))))
        # Falling to the right
        self.assertTrue(has_won(bits((3, 0), (2, 1), (1, 2), (0, 3))))
        self.assertFalse(has_won(bits((0, 0), (1, 1), (2, 2), (4, 4))))

    def test_no_wrap_between_columns(self):
        """
        Top three rows of column 0 plus the bottom of column 1 are
        contiguous in a packed layout without the sentinel bit.
        """
        self.assertFalse(has_won(bits((0, 3), (0, 4), (0, 5), (1, 0))))
        # Same for a horizontal-looking run over the board edge
        self.assertFalse(has_won(bits((5, 5), (6, 5), (0, 0), (1, 0))))

    def test_empty(self):
        self.assertFalse(has_won(0))

    def test_popcount(self):
        self.assertEqual(popcount(0), 0)
        self.assertEqual(popcount(15), 4)
        self.assertEqual(popcount(896), 3)


class TestFormatting(unittest.TestCase):
    def setUp(self):
        # P1 at bottom of column 0, P2 on top of it, P1 at bottom of column 6
        self.board = [bits((0, 0), (6, 0)), bits((0, 1))]

    def test_grid_orientation(self):
        grid = to_grid(self.board)
        self.assertEqual(grid[5][0], 1)
        self.assertEqual(grid[4][0], 2)
        self.assertEqual(grid[5][6], 1)
        self.assertEqual(sum(v != 0 for row in grid for v in row), 3)

    def test_render(self):
        lines = render(self.board).split("\n")
        self.assertEqual(lines[0], " 0 1 2 3 4 5 6")
        self.assertEqual(lines[-1], "|X|.|.|.|.|.|X|")
        self.assertEqual(lines[-2], "|O|.|.|.|.|.|.|")

    def test_describe(self):
        text = describe(self.board)
        self.assertIn("Column 0: P1, P2", text)
        self.assertIn("Column 3: Empty", text)
        self.assertIn("Column 6: P1", text)


if __name__ == '__main__':
    unittest.main()
