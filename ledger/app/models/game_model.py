from sqlalchemy import Column, Integer, String, BigInteger, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from ledger.app.core.database import Base
from rules.core.constants import INITIAL_NEXT_SLOT, TOP_ROW_MASK
from rules.core.status import StatusTag

# Signed BIGINT caps stored counters, ids and versions below the engine's
# unsigned 64-bit bound
BIGINT_MAX = (1 << 63) - 1


class FactoryRecord(Base):
    __tablename__ = "game_factories"

    id = Column(Integer, primary_key=True, index=True)

    game_count = Column(BigInteger, nullable=False, default=0)
    top_row_mask = Column(BigInteger, nullable=False, default=TOP_ROW_MASK)
    initial_next_slot = Column(JSON, nullable=False, default=lambda: list(INITIAL_NEXT_SLOT))

    games = relationship("GameRecord", back_populates="factory", cascade="all, delete-orphan")


class GameRecord(Base):
    __tablename__ = "game_sessions"
    __table_args__ = (UniqueConstraint("factory_id", "game_id", name="uq_factory_game_id"),)

    id = Column(Integer, primary_key=True, index=True)
    factory_id = Column(Integer, ForeignKey("game_factories.id"), nullable=False, index=True)
    game_id = Column(BigInteger, nullable=False)

    factory = relationship("FactoryRecord", back_populates="games")

    # Players (opaque identity tokens)
    player1 = Column(String, nullable=False)
    player2 = Column(String, nullable=False)

    # Game State
    next_slot = Column(JSON, nullable=False)
    board_player1 = Column(BigInteger, nullable=False, default=0)
    board_player2 = Column(BigInteger, nullable=False, default=0)
    move_count = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=StatusTag.ONGOING)
    outcome = Column(String, nullable=True)

    # Set by the engine; SQLAlchemy adds "WHERE version = <loaded>" to every UPDATE
    version = Column(BigInteger, nullable=False, default=0)

    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}

    @property
    def board(self):
        return [self.board_player1, self.board_player2]
