# src/domain/errors.py

from typing import Optional


class DataAccessError(RuntimeError):
    """The relational store or the index store failed or is unreachable."""


class InvalidArgumentError(ValueError):
    """A caller broke an operation's precondition (e.g. a blank query)."""


class PartialIngestionError(DataAccessError):
    """
    An upsert failed partway through a sync pass.

    Documents written before the failure stay written; the remaining
    records of the pass are not attempted.
    """

    def __init__(self, message: str, record_id: Optional[int], ingested: int):
        super().__init__(message)
        self.record_id = record_id
        self.ingested = ingested
