"""Tests for the web3-backed chain source."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from web3.exceptions import BlockNotFound

from chain import Web3ChainSource
from errors import TransportError

from conftest import make_raw_block


def source_with(get_block=None, block_number=None):
    eth = SimpleNamespace(get_block=get_block or AsyncMock())
    if block_number is not None:
        eth.block_number = block_number
    return Web3ChainSource(SimpleNamespace(eth=eth))


@pytest.mark.asyncio
async def test_returns_block() -> None:
    raw = make_raw_block(4)
    get_block = AsyncMock(return_value=raw)

    assert await source_with(get_block).get_block_by_number(4) is raw
    get_block.assert_awaited_once_with(block_identifier=4, full_transactions=True)


@pytest.mark.asyncio
async def test_missing_block_is_none() -> None:
    get_block = AsyncMock(side_effect=BlockNotFound("Block with id: '0x5' not found."))

    assert await source_with(get_block).get_block_by_number(5) is None


@pytest.mark.asyncio
async def test_rpc_failure_carries_block_number() -> None:
    get_block = AsyncMock(side_effect=ConnectionError("connection refused"))

    with pytest.raises(TransportError) as exc:
        await source_with(get_block).get_block_by_number(6)

    assert exc.value.block_number == 6
    assert isinstance(exc.value.cause, ConnectionError)
    assert str(exc.value) == "block #6 transport error! connection refused"


@pytest.mark.asyncio
async def test_head() -> None:
    async def latest():
        return 1234

    assert await source_with(block_number=latest()).head() == 1234


@pytest.mark.asyncio
async def test_head_failure_is_transport_error() -> None:
    async def unreachable():
        raise OSError("network is unreachable")

    with pytest.raises(TransportError) as exc:
        await source_with(block_number=unreachable()).head()

    assert exc.value.block_number is None


def test_from_url_builds_async_client() -> None:
    source = Web3ChainSource.from_url("http://127.0.0.1:8119")

    assert source.w3.provider.endpoint_uri == "http://127.0.0.1:8119"
