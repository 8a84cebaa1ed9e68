from typing import Any, Mapping, Optional
from web3 import AsyncWeb3, AsyncHTTPProvider
from web3.exceptions import BlockNotFound

from errors import TransportError

# ---------- light wrapper over the chain's JSON-RPC ----------
class Web3ChainSource:
    def __init__(self, w3):
        self.w3 = w3

    @classmethod
    def from_url(cls, rpc_url: str) -> "Web3ChainSource":
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)))

    async def head(self) -> int:
        try:
            return await self.w3.eth.block_number
        except Exception as e:
            raise TransportError(None, e) from e

    async def get_block_by_number(self, number: int) -> Optional[Mapping[str, Any]]:
        """Block at `number`, or None when the chain has not produced it yet."""
        try:
            return await self.w3.eth.get_block(block_identifier=number, full_transactions=True)
        except BlockNotFound:
            return None
        except Exception as e:
            raise TransportError(number, e) from e
