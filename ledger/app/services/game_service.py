"""
Game Service - Ledger Host for the Rules Engine

This service is the single source of truth for persisted game state.
It handles:
- Factory creation
- Game creation (id allocation + session record in one transaction)
- Move processing
- Conversion between database records and engine objects

Game creation bumps the factory counter with one atomic UPDATE; moves load the
game with a row lock and rely on the version column to catch concurrent
writers. Each operation commits once. A rejected operation rolls back and
re-raises, so nothing is written.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from sqlalchemy.future import select
from sqlalchemy.orm.exc import StaleDataError

from ledger.app.models.game_model import BIGINT_MAX, FactoryRecord, GameRecord
from rules.core.errors import GameError, StaleSessionVersion
from rules.core.factory import GameFactory
from rules.core.session import GameSession
from rules.core.status import StatusTag, status_from_fields

logger = logging.getLogger(__name__)


class RecordNotFound(LookupError):
    pass


# --- Record <-> Engine ---

def session_from_record(record: GameRecord) -> GameSession:
    """Reconstruct engine state from the persisted fields."""
    return GameSession(
        game_id=record.game_id,
        player1=record.player1,
        player2=record.player2,
        board=[record.board_player1, record.board_player2],
        next_slot=record.next_slot,
        move_count=record.move_count,
        status=status_from_fields(record.status, record.outcome),
        version=record.version,
    )


def write_session(session: GameSession, record: GameRecord):
    """Copy mutable engine fields onto the record (identity fields never change)."""
    record.board_player1 = session.board[0]
    record.board_player2 = session.board[1]
    record.next_slot = list(session.next_slot)
    record.move_count = session.move_count
    record.status = StatusTag.FINISHED if session.status.is_finished else StatusTag.ONGOING
    record.outcome = str(session.status.outcome) if session.status.is_finished else None
    record.version = session.version


class GameService:
    """Host operations around the rules engine"""

    async def create_factory(self, db: AsyncSession, creator: str) -> FactoryRecord:
        """Persist a fresh factory (game_count = 0)."""
        factory = GameFactory.create()
        record = FactoryRecord(
            game_count=factory.game_count,
            top_row_mask=factory.top_row_mask,
            initial_next_slot=factory.initial_next_slot,
        )
        db.add(record)
        await db.commit()
        await db.refresh(record)
        logger.info("Factory %s created by %s", record.id, creator)
        return record

    async def get_factory(self, db: AsyncSession, factory_id: int) -> FactoryRecord:
        query = select(FactoryRecord).where(FactoryRecord.id == factory_id).execution_options(
            # The counter is written with a bulk UPDATE; reload it over any cached copy
            populate_existing=True
        )
        result = await db.execute(query)
        record = result.scalar_one_or_none()

        if not record:
            raise RecordNotFound(f"Factory {factory_id} not found")
        return record

    async def get_game(self, db: AsyncSession, factory_id: int, game_id: int, for_update: bool = False) -> GameRecord:
        query = select(GameRecord).where(
            GameRecord.factory_id == factory_id,
            GameRecord.game_id == game_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await db.execute(query)
        record = result.scalar_one_or_none()

        if not record:
            raise RecordNotFound(f"Game {game_id} not found in factory {factory_id}")
        return record

    async def new_game_with_opponent(self, db: AsyncSession, factory_id: int, player1: str, player2: str) -> GameRecord:
        """
        Allocate the next game id and create the session record.

        The counter is bumped by a single UPDATE ... RETURNING, which takes the
        row's write lock (a database write lock on SQLite) until the commit, so
        concurrent creations against the same factory serialize and each sees
        a fresh id.
        """
        try:
            result = await db.execute(
                update(FactoryRecord)
                .where(FactoryRecord.id == factory_id, FactoryRecord.game_count < BIGINT_MAX)
                .values(game_count=FactoryRecord.game_count + 1)
                .returning(FactoryRecord.game_count)
                .execution_options(synchronize_session=False)
            )
            new_count = result.scalar_one_or_none()
            if new_count is None:
                await self.get_factory(db, factory_id)
                raise OverflowError(f"Game counter of factory {factory_id} exhausted")

            factory = GameFactory(game_count=new_count - 1)
            session = factory.create_session(player1, player2)

            record = GameRecord(
                factory_id=factory_id,
                game_id=session.game_id,
                player1=session.player1,
                player2=session.player2,
            )
            write_session(session, record)
            db.add(record)

            await db.commit()
        except (GameError, RecordNotFound, OverflowError) as e:
            await db.rollback()
            logger.warning("New game rejected in factory %s: %s", factory_id, e)
            raise
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Failed to create game in factory %s", factory_id)
            raise

        await db.refresh(record)
        logger.info("Game %s created in factory %s", record.game_id, factory_id)
        return record

    async def make_move(
        self,
        db: AsyncSession,
        factory_id: int,
        game_id: int,
        player: str,
        column: int,
        expected_version: Optional[int] = None,
    ) -> GameRecord:
        """Apply one move and persist the updated session"""
        try:
            await self.get_factory(db, factory_id)
            record = await self.get_game(db, factory_id, game_id, for_update=True)

            session = session_from_record(record)
            session.apply_move(player, column, expected_version=expected_version)
            write_session(session, record)

            await db.commit()
        except StaleDataError as e:
            await db.rollback()
            logger.warning("Concurrent write on game %s: %s", game_id, e)
            raise StaleSessionVersion(f"Game {game_id} was modified by another move") from e
        except (GameError, RecordNotFound) as e:
            await db.rollback()
            logger.warning("Move rejected in game %s: %s", game_id, e)
            raise
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Failed to save move for game %s", game_id)
            raise

        await db.refresh(record)
        logger.info(
            "Game %s: %s played column %s (move %d, %s)",
            game_id, player, column, record.move_count, record.status,
        )
        return record


# Singleton instance
game_service = GameService()
