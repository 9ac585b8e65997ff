"""FastAPI dependencies exposing request-scoped DB sessions.

Routers that only read take `get_db_read` so reads can be routed to a
replica; everything that writes takes `get_db_write`.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable session."""
    yield from get_write_session()


def get_db_read():
    """Yield a session bound to the read engine."""
    yield from get_read_session()
