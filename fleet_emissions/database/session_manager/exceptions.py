"""
Session manager exceptions.
"""


class DatabaseNotInitialized(Exception):
    """Raised when a session is requested before Database.init()."""
    pass


class DatabaseTransactionError(Exception):
    """Raised when committing a catalog or fleet data session fails."""
    pass
