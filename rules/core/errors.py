# rules/core/errors.py
from typing import Optional


class GameError(ValueError):
    """
    Base class for rejected operations.
    Every subclass is raised before any state is written, so the caller may
    retry with corrected input.
    """
    code = "GameError"
    message = "Game error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class SamePlayers(GameError):
    code = "SamePlayers"
    message = "Same players"


class NotPlayerTurn(GameError):
    code = "NotPlayerTurn"
    message = "Not player's turn"


class GameAlreadyFinished(GameError):
    code = "GameAlreadyFinished"
    message = "Game already finished"


class InvalidColumnInput(GameError):
    code = "InvalidColumnInput"
    message = "Invalid column input"


class ColumnAlreadyFull(GameError):
    code = "ColumnAlreadyFull"
    message = "Column already full"


class StaleSessionVersion(GameError):
    code = "StaleSessionVersion"
    message = "Session was modified by another move"
