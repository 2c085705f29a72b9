"""FriendsBets: peer-betting ledger for yes/no events among friends."""

__version__ = "0.1.0"
__author__ = "FriendsBets Team"

__all__ = ["__version__", "__author__"]
