"""Trades and positions API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from friendsbets.database import Database, get_database, get_db
from friendsbets.schemas import (
    LEDGER_ERROR_RESPONSES,
    PositionResponse,
    TradeCreate,
    TradeResponse,
)
from friendsbets.services import trade_service
from friendsbets.storage import LedgerStore, run_ledger_operation

router = APIRouter(prefix="/api", tags=["Trades"], responses=LEDGER_ERROR_RESPONSES)


@router.get("/trades", response_model=list[TradeResponse])
async def list_recent_trades(
    database: Database = Depends(get_database),
    db: AsyncSession = Depends(get_db),
):
    """Most recent trades across all events."""
    return await LedgerStore(db).list_recent_trades(
        limit=database.settings.recent_trades_limit
    )


@router.post("/trades", response_model=TradeResponse, status_code=201)
async def place_trade(
    request: TradeCreate,
    database: Database = Depends(get_database),
):
    """Place a trade."""
    return await run_ledger_operation(
        database,
        lambda store: trade_service.place_trade(
            store,
            event_id=request.event_id,
            user_id=request.user_id,
            prediction=request.prediction,
            amount=request.amount,
        ),
    )


@router.get("/positions", response_model=list[PositionResponse])
async def list_positions(db: AsyncSession = Depends(get_db)):
    """All positions."""
    return await LedgerStore(db).list_positions()
