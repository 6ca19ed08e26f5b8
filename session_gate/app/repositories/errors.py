class StoreError(Exception):
    """Credential store failure (connection, query, transaction)"""


class UniqueViolationError(StoreError):
    """A write collided with a unique constraint"""
