"""Admin API access — typed async client and persisted auth token."""

from beaconadmin.rpc.client import AdminClient
from beaconadmin.rpc.token import TokenStore

__all__ = ["AdminClient", "TokenStore"]
