# rules/core/session.py
import logging
from typing import Any, Dict, Hashable, List, Optional, Sequence

from .bitboard import has_won, is_sentinel, to_grid, render, describe
from .constants import COLUMNS, HEIGHT, INITIAL_NEXT_SLOT, MAX_MOVES
from .errors import (
    ColumnAlreadyFull,
    GameAlreadyFinished,
    InvalidColumnInput,
    NotPlayerTurn,
    StaleSessionVersion,
)
from .status import ONGOING, Finished, GameStatus, Outcome, StatusTag

logger = logging.getLogger(__name__)

WIN_OUTCOMES = (Outcome.PLAYER1_WON, Outcome.PLAYER2_WON)


class GameSession:
    """
    One match between two identified players.

    board[0] / board[1] are the bitboards of player1 / player2 and never
    share a bit. next_slot[c] is the bit index where the next disc of column
    c lands, and reaches the sentinel 7c+6 once the column holds six discs.
    """

    def __init__(
        self,
        game_id: int,
        player1: Hashable,
        player2: Hashable,
        board: Optional[Sequence[int]] = None,
        next_slot: Optional[Sequence[int]] = None,
        move_count: int = 0,
        status: GameStatus = ONGOING,
        version: int = 0,
    ):
        self.game_id = game_id
        self.player1 = player1
        self.player2 = player2
        self.board: List[int] = list(board) if board is not None else [0, 0]
        self.next_slot: List[int] = list(next_slot) if next_slot is not None else list(INITIAL_NEXT_SLOT)
        self.move_count = move_count
        self.status = status
        self.version = version

    def __repr__(self) -> str:
        return (
            f"GameSession(game_id={self.game_id}, move_count={self.move_count}, "
            f"status={self.status}, version={self.version})"
        )

    @property
    def current_player_index(self) -> int:
        return self.move_count & 1

    @property
    def current_player(self) -> Hashable:
        return self.player1 if self.current_player_index == 0 else self.player2

    @property
    def winner(self) -> Optional[Hashable]:
        if self.status.outcome == Outcome.PLAYER1_WON:
            return self.player1
        if self.status.outcome == Outcome.PLAYER2_WON:
            return self.player2
        return None

    def discs_in_column(self, column: int) -> int:
        return self.next_slot[column] - column * HEIGHT

    def valid_columns(self) -> List[int]:
        """Returns a list of column indices (0-6) that are not full."""
        if self.status.is_finished:
            return []
        return [c for c in range(COLUMNS) if not is_sentinel(self.next_slot[c])]

    def apply_move(self, player: Hashable, column: int, expected_version: Optional[int] = None) -> GameStatus:
        """
        Drops a disc for 'player' into 'column' and returns the new status.

        All checks run before the first write; a rejected move raises a
        GameError and leaves every field untouched.
        """
        if self.status.is_finished:
            raise GameAlreadyFinished()

        if expected_version is not None and expected_version != self.version:
            raise StaleSessionVersion(
                f"Game {self.game_id} is at version {self.version}, not {expected_version}"
            )

        index = self.current_player_index
        if player != self.current_player:
            raise NotPlayerTurn()

        if isinstance(column, bool) or not isinstance(column, int) or not 0 <= column < COLUMNS:
            raise InvalidColumnInput()

        slot = self.next_slot[column]
        if is_sentinel(slot):
            raise ColumnAlreadyFull()

        # --- Commit ---
        self.board[index] |= 1 << slot
        self.next_slot[column] = slot + 1
        self.move_count += 1
        self.version += 1

        if has_won(self.board[index]):
            self.status = Finished(WIN_OUTCOMES[index])
        elif self.move_count == MAX_MOVES:
            self.status = Finished(Outcome.DRAW)

        if self.status.is_finished:
            logger.info("Game %s finished after %d moves: %s", self.game_id, self.move_count, self.status)

        return self.status

    # --- Views ---

    def snapshot(self) -> Dict[str, Any]:
        """Persisted fields as plain values."""
        return {
            "game_id": self.game_id,
            "player1": self.player1,
            "player2": self.player2,
            "board": list(self.board),
            "next_slot": list(self.next_slot),
            "move_count": self.move_count,
            "status": StatusTag.FINISHED if self.status.is_finished else StatusTag.ONGOING,
            "outcome": str(self.status.outcome) if self.status.is_finished else None,
            "version": self.version,
        }

    def to_grid(self) -> List[List[int]]:
        return to_grid(self.board)

    def render(self) -> str:
        return render(self.board)

    def describe(self) -> str:
        return describe(self.board)
