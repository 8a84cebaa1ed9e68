from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, Field, ValidationError

from errors import ConversionError
from helpers import to_hex, to_addr, hex_to_int

# ---------- storage-ready models ----------
class DomainTransaction(BaseModel):
    hash: str
    block_number: int = Field(ge=0)
    tx_index: int = Field(ge=0)
    from_: str
    to: Optional[str] = None
    value_wei: int = Field(ge=0)
    nonce: int = Field(ge=0)
    gas: int = Field(ge=0)
    gas_price: Optional[str] = None
    input: Optional[str] = None

class DomainBlock(BaseModel):
    number: int = Field(ge=0)
    hash: str
    parent_hash: str
    timestamp: int
    gas_limit: Optional[str] = None
    gas_used: Optional[str] = None
    miner: Optional[str] = None
    size: Optional[int] = None
    transactions: List[DomainTransaction] = []

    @property
    def tx_count(self) -> int:
        return len(self.transactions)

# ---------- raw web3 block -> domain ----------
def _number_of(raw: Mapping[str, Any]) -> Optional[int]:
    try:
        return hex_to_int(raw.get("number"))
    except (TypeError, ValueError):
        return None

def to_transaction(tx: Mapping[str, Any], block_number: int) -> DomainTransaction:
    # hashes-only blocks carry bare tx hashes, not full objects
    if not isinstance(tx, Mapping):
        raise TypeError(f"expected full transaction object, got {type(tx).__name__}")
    return DomainTransaction(
        hash=to_hex(tx["hash"]),
        block_number=block_number,
        tx_index=hex_to_int(tx["transactionIndex"]),
        from_=to_addr(tx["from"]),
        to=to_addr(tx.get("to")),
        value_wei=hex_to_int(tx["value"]),
        nonce=hex_to_int(tx["nonce"]),
        gas=hex_to_int(tx["gas"]),
        gas_price=to_hex(tx.get("gasPrice")),
        input=to_hex(tx.get("input")),
    )

def to_domain_block(raw: Mapping[str, Any]) -> DomainBlock:
    """
    Map a block as returned by eth_getBlockByNumber(n, full_transactions=True)
    onto DomainBlock. Raises ConversionError on missing or malformed fields.
    """
    number = _number_of(raw)
    try:
        return DomainBlock(
            number=hex_to_int(raw["number"]),
            hash=to_hex(raw["hash"]),
            parent_hash=to_hex(raw["parentHash"]),
            timestamp=hex_to_int(raw["timestamp"]),
            gas_limit=to_hex(raw.get("gasLimit")),
            gas_used=to_hex(raw.get("gasUsed")),
            miner=to_addr(raw.get("miner")),
            size=hex_to_int(raw.get("size")),
            transactions=[to_transaction(tx, number) for tx in raw.get("transactions") or []],
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise ConversionError(number, e) from e
