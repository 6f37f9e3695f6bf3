"""
Typed errors raised by the record store
"""


class RecordStoreError(Exception):
    """Base class for record store failures"""


class StoreConnectionError(RecordStoreError):
    """The database cannot be reached, authenticated to, or the connection dropped"""


class StoreTimeoutError(StoreConnectionError):
    """A database round trip exceeded its timeout"""


class ConstraintViolation(RecordStoreError):
    """A write would break a table constraint (duplicate primary key)"""

    def __init__(self, message: str, record_id=None):
        super().__init__(message)
        self.record_id = record_id


class StoreQueryError(RecordStoreError):
    """Any other database error: malformed statement, missing table, bad data"""
