"""
Session manager exceptions.
"""


class DatabaseNotInitialized(Exception):
    """Database.init() has not been called, so no store is available."""


class DatabaseTransactionError(Exception):
    """Commit or rollback of a request's session failed."""
