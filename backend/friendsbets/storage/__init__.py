"""Storage layer for FriendsBets - the ledger store the services write through."""

from .ledger_store import LedgerStore
from .unit_of_work import run_ledger_operation

__all__ = ["LedgerStore", "run_ledger_operation"]
