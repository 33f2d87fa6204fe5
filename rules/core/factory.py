# rules/core/factory.py
import logging
import threading
from typing import Hashable, List

from .constants import INITIAL_NEXT_SLOT, TOP_ROW_MASK, U64_MAX
from .errors import SamePlayers
from .session import GameSession

logger = logging.getLogger(__name__)


class GameFactory:
    """
    Mints GameSessions and owns the game counter.

    The counter is only advanced by create_session, together with the
    session it identifies.
    """

    def __init__(self, game_count: int = 0):
        self._game_count = game_count
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "GameFactory":
        return cls(game_count=0)

    @property
    def game_count(self) -> int:
        return self._game_count

    @property
    def top_row_mask(self) -> int:
        return TOP_ROW_MASK

    @property
    def initial_next_slot(self) -> List[int]:
        return list(INITIAL_NEXT_SLOT)

    def derive_next_game_id(self) -> int:
        """Id the next created session will receive. Does not reserve it."""
        return self._game_count

    def create_session(self, player1: Hashable, player2: Hashable) -> GameSession:
        if player1 == player2:
            raise SamePlayers()

        with self._lock:
            game_id = self._game_count
            if game_id >= U64_MAX:
                raise OverflowError("Game counter exhausted")
            session = GameSession(
                game_id=game_id,
                player1=player1,
                player2=player2,
                next_slot=self.initial_next_slot,
            )
            self._game_count = game_id + 1

        logger.debug("Created game %s", game_id)
        return session
