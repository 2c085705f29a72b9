"""Events API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from friendsbets.database import Database, get_database, get_db
from friendsbets.schemas import (
    LEDGER_ERROR_RESPONSES,
    EventCreate,
    EventResolveRequest,
    EventResponse,
    PositionResponse,
    TradeResponse,
)
from friendsbets.services import event_service, resolution_service
from friendsbets.storage import LedgerStore, run_ledger_operation

router = APIRouter(
    prefix="/api/events", tags=["Events"], responses=LEDGER_ERROR_RESPONSES
)


@router.get("", response_model=list[EventResponse])
async def list_events(db: AsyncSession = Depends(get_db)):
    """List events, newest first."""
    return await LedgerStore(db).list_events()


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, db: AsyncSession = Depends(get_db)):
    """Get a single event."""
    event = await LedgerStore(db).get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    request: EventCreate,
    database: Database = Depends(get_database),
):
    """Create an open event."""
    return await run_ledger_operation(
        database,
        lambda store: event_service.create_event(
            store,
            title=request.title,
            created_by_id=request.created_by_id,
            description=request.description,
        ),
    )


@router.post("/{event_id}/resolve", response_model=EventResponse)
async def resolve_event(
    event_id: str,
    request: EventResolveRequest,
    database: Database = Depends(get_database),
):
    """Resolve an event and pay out winning positions."""
    return await run_ledger_operation(
        database,
        lambda store: resolution_service.resolve_event(
            store, event_id, request.outcome
        ),
    )


@router.get("/{event_id}/trades", response_model=list[TradeResponse])
async def get_event_trades(event_id: str, db: AsyncSession = Depends(get_db)):
    """All trades on an event, newest first."""
    return await LedgerStore(db).list_trades_for_event(event_id)


@router.get("/{event_id}/positions", response_model=list[PositionResponse])
async def get_event_positions(event_id: str, db: AsyncSession = Depends(get_db)):
    """All positions on an event."""
    return await LedgerStore(db).list_positions_for_event(event_id)
