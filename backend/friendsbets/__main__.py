"""FriendsBets CLI entry point."""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

env_file = Path.cwd() / ".env"
load_dotenv(env_file)

from friendsbets import __version__
from friendsbets.config import get_settings
from friendsbets.database import Database
from friendsbets.exceptions import LedgerError
from friendsbets.observability import configure_logging
from friendsbets.services import (
    event_service,
    resolution_service,
    trade_service,
    user_service,
)
from friendsbets.storage import run_ledger_operation

logger = logging.getLogger(__name__)


def _parse_side(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("yes", "y", "true", "1"):
        return True
    if normalized in ("no", "n", "false", "0"):
        return False
    raise argparse.ArgumentTypeError(f"Expected yes or no, got {value!r}")


def _parse_amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid amount: {value!r}")


def _side(prediction: bool) -> str:
    return "YES" if prediction else "NO"


async def _with_database(action) -> int:
    """Open the database, run action(database), and always dispose the engine."""
    database = Database(get_settings())
    try:
        await database.create_all()
        return await action(database)
    finally:
        await database.dispose()


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the ledger tables."""

    async def action(database: Database) -> int:
        logger.info(f"Database ready: {database.info()['url']}")
        return 0

    return asyncio.run(_with_database(action))


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "friendsbets.main:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_create_user(args: argparse.Namespace) -> int:
    """Register a user."""

    async def action(database: Database) -> int:
        user = await run_ledger_operation(
            database,
            lambda store: user_service.create_user(store, args.display_name),
        )
        print(f"{user.id}  {user.display_name}  ${user.balance}")
        return 0

    return asyncio.run(_with_database(action))


def cmd_create_event(args: argparse.Namespace) -> int:
    """Create an open event."""

    async def action(database: Database) -> int:
        event = await run_ledger_operation(
            database,
            lambda store: event_service.create_event(
                store,
                title=args.title,
                created_by_id=args.created_by,
                description=args.description,
            ),
        )
        print(f"{event.id}  {event.title}  [{event.status}]")
        return 0

    return asyncio.run(_with_database(action))


def cmd_trade(args: argparse.Namespace) -> int:
    """Place a trade."""

    async def action(database: Database) -> int:
        trade = await run_ledger_operation(
            database,
            lambda store: trade_service.place_trade(
                store,
                event_id=args.event_id,
                user_id=args.user_id,
                prediction=args.side,
                amount=args.amount,
            ),
        )
        print(f"{trade.id}  {_side(trade.prediction)}  ${trade.amount}")
        return 0

    return asyncio.run(_with_database(action))


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve an event and pay out winners."""

    async def action(database: Database) -> int:
        event = await run_ledger_operation(
            database,
            lambda store: resolution_service.resolve_event(
                store, args.event_id, args.outcome
            ),
        )
        print(f"{event.id}  {event.title}  resolved {_side(event.outcome)}")
        return 0

    return asyncio.run(_with_database(action))


def cmd_positions(args: argparse.Namespace) -> int:
    """List positions for an event or a user."""

    async def action(database: Database) -> int:
        async def load(store):
            if args.event_id:
                return await store.list_positions_for_event(args.event_id)
            if args.user_id:
                return await store.list_positions_for_user(args.user_id)
            return await store.list_positions()

        positions = await run_ledger_operation(database, load)
        for position in positions:
            print(
                f"{position.event_id}  {position.user_id}  "
                f"{_side(position.prediction)}  ${position.amount}"
            )
        return 0

    return asyncio.run(_with_database(action))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="friendsbets",
        description="FriendsBets peer-betting ledger",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.set_defaults(func=cmd_serve)

    user_parser = subparsers.add_parser("create-user", help="Register a user")
    user_parser.add_argument("display_name")
    user_parser.set_defaults(func=cmd_create_user)

    event_parser = subparsers.add_parser("create-event", help="Create an event")
    event_parser.add_argument("title")
    event_parser.add_argument("--created-by", required=True, help="Creator user id")
    event_parser.add_argument("--description", default=None)
    event_parser.set_defaults(func=cmd_create_event)

    trade_parser = subparsers.add_parser("trade", help="Place a trade")
    trade_parser.add_argument("event_id")
    trade_parser.add_argument("user_id")
    trade_parser.add_argument("side", type=_parse_side, help="yes or no")
    trade_parser.add_argument("amount", type=_parse_amount)
    trade_parser.set_defaults(func=cmd_trade)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an event")
    resolve_parser.add_argument("event_id")
    resolve_parser.add_argument("outcome", type=_parse_side, help="yes or no")
    resolve_parser.set_defaults(func=cmd_resolve)

    positions_parser = subparsers.add_parser("positions", help="List positions")
    scope = positions_parser.add_mutually_exclusive_group()
    scope.add_argument("--event-id", default=None)
    scope.add_argument("--user-id", default=None)
    positions_parser.set_defaults(func=cmd_positions)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings())

    try:
        return args.func(args)
    except LedgerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
