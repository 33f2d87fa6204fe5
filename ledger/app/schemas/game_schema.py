from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class FactoryCreate(BaseModel):
    creator: str = Field(min_length=1)


class FactoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    game_count: int
    top_row_mask: int
    initial_next_slot: List[int]


class GameCreate(BaseModel):
    player1: str = Field(min_length=1)
    player2: str = Field(min_length=1)


class MoveRequest(BaseModel):
    player: str = Field(min_length=1)
    # Range is enforced by the engine so it can answer with InvalidColumnInput
    column: int
    expected_version: Optional[int] = Field(default=None, ge=0)


class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    factory_id: int
    game_id: int
    player1: str
    player2: str
    board: List[int]
    next_slot: List[int]
    move_count: int
    status: str
    outcome: Optional[str] = None
    version: int


class BoardView(BaseModel):
    game_id: int
    grid: List[List[int]]  # 6 rows x 7 cols, row 0 = top
    visual: str
    description: str
    valid_columns: List[int]


class ErrorResponse(BaseModel):
    code: str
    message: str
