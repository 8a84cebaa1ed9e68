from typing import Optional


class IndexerError(Exception):
    """Base for every failure that stops the sync loop."""

    kind = "indexer"

    def __init__(self, block_number: Optional[int], cause: BaseException):
        self.block_number = block_number
        self.cause = cause
        super().__init__(str(self))

    def __str__(self):
        where = f"block #{self.block_number}" if self.block_number is not None else "indexer"
        return f"{where} {self.kind} error! {self.cause}"


class TransportError(IndexerError):
    """Chain RPC unreachable or returned malformed data."""

    kind = "transport"


class StorageError(IndexerError):
    kind = "storage"


class ConversionError(IndexerError):
    kind = "conversion"
