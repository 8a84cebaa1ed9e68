import logging, sqlite3, time
from typing import Dict, Optional

from convert import DomainBlock
from errors import StorageError

log = logging.getLogger(__name__)

SLOW_WRITE_SECS = 5.0

SCHEMA = """
    CREATE TABLE IF NOT EXISTS meta (
        k TEXT PRIMARY KEY,
        v TEXT
    );

    CREATE TABLE IF NOT EXISTS blocks (
        number                INTEGER PRIMARY KEY,
        hash                  TEXT NOT NULL,
        parent_hash           TEXT NOT NULL,
        timestamp             INTEGER NOT NULL,
        gas_limit             TEXT,
        gas_used              TEXT,
        miner                 TEXT,
        size                  INTEGER,
        tx_count              INTEGER NOT NULL
    );

    CREATE TABLE IF NOT EXISTS transactions (
        hash                  TEXT PRIMARY KEY,
        block_number          INTEGER NOT NULL,
        tx_index              INTEGER NOT NULL,
        "from"                TEXT NOT NULL,
        "to"                  TEXT,
        value_wei             TEXT NOT NULL,      -- as decimal string
        nonce                 INTEGER NOT NULL,
        gas                   INTEGER NOT NULL,
        gas_price             TEXT,
        input                 TEXT,

        FOREIGN KEY(block_number) REFERENCES blocks(number) ON DELETE CASCADE
    );

    CREATE INDEX IF NOT EXISTS idx_transactions_block ON transactions(block_number);
    CREATE INDEX IF NOT EXISTS idx_transactions_from  ON transactions("from");
    CREATE INDEX IF NOT EXISTS idx_transactions_to    ON transactions("to");
"""

def db(path: str) -> sqlite3.Connection:
    try:
        conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA temp_store=MEMORY;")
        conn.execute("PRAGMA foreign_keys=ON;")
    except sqlite3.Error as e:
        raise StorageError(None, e) from e
    if log.isEnabledFor(logging.DEBUG):
        conn.set_trace_callback(lambda stmt: log.debug("sql: %s", stmt))
    return conn

def ensure_schema(conn: sqlite3.Connection):
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error as e:
        raise StorageError(None, e) from e

def get_meta(conn, key, default=None):
    row = conn.execute("SELECT v FROM meta WHERE k=?", (key,)).fetchone()
    return row[0] if row else default

def set_meta(conn, key, value):
    conn.execute("INSERT INTO meta(k,v) VALUES(?,?) ON CONFLICT(k) DO UPDATE SET v=excluded.v;", (key, value))

def seed_meta(conn, identifiers: Dict[str, Optional[str]]):
    """Record the rollup identifiers this database mirrors."""
    try:
        for k, v in identifiers.items():
            if v is not None:
                set_meta(conn, k, v)
    except sqlite3.Error as e:
        raise StorageError(None, e) from e


class BlockStore:
    """Blocks and their transactions in SQLite; one block per write transaction."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def max_block_number(self) -> Optional[int]:
        try:
            row = self.conn.execute("SELECT MAX(number) FROM blocks").fetchone()
        except sqlite3.Error as e:
            raise StorageError(None, e) from e
        return None if row[0] is None else int(row[0])

    def block_count(self, number: int) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM blocks WHERE number=?", (number,)).fetchone()[0]

    def store_block(self, b: DomainBlock):
        started = time.monotonic()
        try:
            self.conn.execute("BEGIN")
            try:
                self._insert(b)
            except BaseException:
                self.conn.execute("ROLLBACK")
                raise
            self.conn.execute("COMMIT")
        except (sqlite3.Error, OverflowError) as e:
            raise StorageError(b.number, e) from e

        elapsed = time.monotonic() - started
        if elapsed > SLOW_WRITE_SECS:
            log.warning("slow write: block %d took %.2fs", b.number, elapsed)

    def _insert(self, b: DomainBlock):
        self.conn.execute("""
        INSERT INTO blocks(
            number, hash, parent_hash, timestamp, gas_limit, gas_used,
            miner, size, tx_count
        ) VALUES(?,?,?,?,?,?,?,?,?)
        """, (
            b.number, b.hash, b.parent_hash, b.timestamp,
            b.gas_limit, b.gas_used, b.miner, b.size, b.tx_count
        ))
        self.conn.executemany("""
        INSERT INTO transactions(
            hash, block_number, tx_index, "from", "to", value_wei,
            nonce, gas, gas_price, input
        ) VALUES (?,?,?,?,?,?,?,?,?,?)
        """, [(
            tx.hash, tx.block_number, tx.tx_index, tx.from_, tx.to,
            str(tx.value_wei), tx.nonce, tx.gas, tx.gas_price, tx.input
        ) for tx in b.transactions])
