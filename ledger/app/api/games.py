from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.app.core.database import get_db
from ledger.app.schemas.game_schema import (
    BoardView,
    FactoryCreate,
    FactoryResponse,
    GameCreate,
    GameResponse,
    MoveRequest,
)
from ledger.app.services.game_service import game_service, session_from_record

router = APIRouter()


@router.post("", response_model=FactoryResponse, status_code=status.HTTP_201_CREATED)
async def create_factory(payload: FactoryCreate, db: AsyncSession = Depends(get_db)):
    return await game_service.create_factory(db, payload.creator)


@router.get("/{factory_id}", response_model=FactoryResponse)
async def get_factory(factory_id: int, db: AsyncSession = Depends(get_db)):
    return await game_service.get_factory(db, factory_id)


@router.post("/{factory_id}/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def new_game_with_opponent(factory_id: int, payload: GameCreate, db: AsyncSession = Depends(get_db)):
    """Player 1 is the creator, player 2 the invited opponent."""
    return await game_service.new_game_with_opponent(db, factory_id, payload.player1, payload.player2)


@router.get("/{factory_id}/games/{game_id}", response_model=GameResponse)
async def get_game(factory_id: int, game_id: int, db: AsyncSession = Depends(get_db)):
    return await game_service.get_game(db, factory_id, game_id)


@router.post("/{factory_id}/games/{game_id}/moves", response_model=GameResponse)
async def make_move(factory_id: int, game_id: int, payload: MoveRequest, db: AsyncSession = Depends(get_db)):
    return await game_service.make_move(
        db, factory_id, game_id, payload.player, payload.column, payload.expected_version
    )


@router.get("/{factory_id}/games/{game_id}/board", response_model=BoardView)
async def get_board(factory_id: int, game_id: int, db: AsyncSession = Depends(get_db)):
    """Grid plus the ASCII and column-by-column renderings of the board."""
    record = await game_service.get_game(db, factory_id, game_id)
    session = session_from_record(record)
    return BoardView(
        game_id=session.game_id,
        grid=session.to_grid(),
        visual=session.render(),
        description=session.describe(),
        valid_columns=session.valid_columns(),
    )
