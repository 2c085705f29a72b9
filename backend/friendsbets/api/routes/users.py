"""Users API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from friendsbets.database import Database, get_database, get_db
from friendsbets.schemas import (
    LEDGER_ERROR_RESPONSES,
    PositionResponse,
    UserCreate,
    UserResponse,
)
from friendsbets.services import user_service
from friendsbets.storage import LedgerStore, run_ledger_operation

router = APIRouter(
    prefix="/api/users", tags=["Users"], responses=LEDGER_ERROR_RESPONSES
)


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List users ordered by display name."""
    return await LedgerStore(db).list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    """Get a single user."""
    user = await LedgerStore(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    request: UserCreate,
    database: Database = Depends(get_database),
):
    """Register a user with the starting balance."""
    return await run_ledger_operation(
        database,
        lambda store: user_service.create_user(store, request.display_name),
    )


@router.get("/{user_id}/positions", response_model=list[PositionResponse])
async def get_user_positions(user_id: str, db: AsyncSession = Depends(get_db)):
    """All positions held by a user."""
    return await LedgerStore(db).list_positions_for_user(user_id)
