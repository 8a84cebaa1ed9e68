import asyncio, logging

from convert import to_domain_block
from errors import TransportError
from tip import TipTracker

log = logging.getLogger(__name__)

POLL_INTERVAL = 3.0

class Runner:
    """
    Mirrors the chain into storage one block at a time.

    Only "no new block yet" is retried (after `poll_interval` seconds); any
    IndexerError raised by the chain source, the conversion or the store
    ends `run()`. Restarting is safe: the tip is recovered from storage.
    Run at most one Runner per database.
    """

    def __init__(self, chain, storage, convert=to_domain_block, poll_interval: float = POLL_INTERVAL):
        self.chain = chain
        self.storage = storage
        self.convert = convert
        self.poll_interval = poll_interval
        self.tip = TipTracker(storage)

    async def insert(self) -> bool:
        local_tip = self.tip.current_tip()
        number = 0 if local_tip is None else local_tip + 1

        raw = await self.chain.get_block_by_number(number)
        if raw is None:
            return False

        block = self.convert(raw)
        if block.number != number:
            raise TransportError(number, ValueError(f"chain returned block #{block.number}"))

        self.storage.store_block(block)
        self.tip.advance()
        log.info("Sync block %d", number)
        return True

    async def run(self):
        while True:
            if not await self.insert():
                await asyncio.sleep(self.poll_interval)
