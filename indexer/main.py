import asyncio, logging, signal, uvloop

import config
from chain import Web3ChainSource
from db import db, ensure_schema, seed_meta, BlockStore
from errors import IndexerError
from runner import Runner

log = logging.getLogger("indexer")

async def main():
    chain = Web3ChainSource.from_url(config.GODWOKEN_RPC_URL)
    latest = await chain.head()
    log.info("Connected to Godwoken, head=%d", latest)

    conn = db(config.DB_PATH)
    ensure_schema(conn)
    seed_meta(conn, config.ROLLUP_IDENTIFIERS)

    runner = Runner(chain, BlockStore(conn), poll_interval=config.POLL_INTERVAL)
    task = asyncio.ensure_future(runner.run())
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, task.cancel)

    try:
        await task
    except asyncio.CancelledError:
        log.info("Stopped at tip %s", runner.tip.local_tip)
    finally:
        conn.close()

def cli():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )
    try:
        uvloop.run(main())
    except IndexerError as e:
        raise SystemExit(f"[runner] {e}")

if __name__ == "__main__":
    cli()
