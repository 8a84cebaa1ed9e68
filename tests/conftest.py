"""Pytest configuration and shared fixtures."""

import pytest
from hexbytes import HexBytes
from web3.datastructures import AttributeDict

from db import db, ensure_schema, BlockStore
from errors import TransportError

MINER  = "0x" + "ab" * 20
SENDER = "0x" + "11" * 20
TO     = "0x" + "22" * 20


def make_raw_tx(block_number: int, index: int = 0) -> AttributeDict:
    return AttributeDict({
        "hash": HexBytes(bytes([index + 1]) + block_number.to_bytes(31, "big")),
        "blockNumber": block_number,
        "transactionIndex": index,
        "from": SENDER,
        "to": TO,
        "value": 10**21,
        "nonce": index,
        "gas": 21000,
        "gasPrice": 1_000_000_000,
        "input": HexBytes(b""),
    })


def make_raw_block(number: int, tx_count: int = 0) -> AttributeDict:
    """A block shaped like web3's eth.get_block(n, full_transactions=True)."""
    return AttributeDict({
        "number": number,
        "hash": HexBytes(number.to_bytes(32, "big")),
        "parentHash": HexBytes(max(number - 1, 0).to_bytes(32, "big")),
        "timestamp": 1_700_000_000 + number % 10_000,
        "gasLimit": 12_500_000,
        "gasUsed": 21000 * tx_count,
        "miner": MINER,
        "size": 512,
        "transactions": [make_raw_tx(number, i) for i in range(tx_count)],
    })


class FakeChain:
    """Serves `blocks` by number; heights missing from the dict are not produced yet."""

    def __init__(self, blocks=None, fail_at=None):
        self.blocks = dict(blocks or {})
        self.fail_at = fail_at
        self.requested = []

    async def get_block_by_number(self, number):
        self.requested.append(number)
        if self.fail_at is not None and number == self.fail_at:
            raise TransportError(number, ConnectionError("connection refused"))
        return self.blocks.get(number)


@pytest.fixture
def conn(tmp_path):
    c = db(str(tmp_path / "index.sqlite"))
    ensure_schema(c)
    yield c
    c.close()


@pytest.fixture
def store(conn):
    return BlockStore(conn)
