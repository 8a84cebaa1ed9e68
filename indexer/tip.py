from typing import Optional


class TipTracker:
    """
    Last synced block number. Derived from storage on first read, then kept
    in memory and moved forward only by `advance()`.
    """

    def __init__(self, storage):
        self.storage = storage
        self.local_tip: Optional[int] = None

    # None means no local blocks
    def current_tip(self) -> Optional[int]:
        if self.local_tip is None:
            self.local_tip = self.storage.max_block_number()
        return self.local_tip

    def advance(self) -> int:
        self.local_tip = 0 if self.local_tip is None else self.local_tip + 1
        return self.local_tip
