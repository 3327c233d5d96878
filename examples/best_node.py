"""
Pick the most up to date node from a list of seeds and print some chain information.
"""
import asyncio
import logging
from neo2 import api, settings


def enable_rpc_logging():
    stdio_handler = logging.StreamHandler()
    stdio_handler.setLevel(logging.DEBUG)
    stdio_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s - %(module)s:%(lineno)s %(message)s"))

    rpc_logger = logging.getLogger('neo2.rpc')
    rpc_logger.addHandler(stdio_handler)
    rpc_logger.setLevel(logging.DEBUG)


async def main():
    settings.settings.rpc.seedlist = [
        "http://seed1.neo.org:10332",
        "http://seed2.neo.org:10332",
        "http://seed3.neo.org:10332",
    ]
    settings.settings.rpc.timeout = 5.0

    async with await api.NeoRpcClient.from_multiple_nodes() as client:
        print(f"Using node: {client.url}")
        if not await client.ping():
            print("Node did not accept a TCP connection")
            return

        height = await client.get_block_count()
        best_hash = await client.get_best_block_hash()
        print(f"Block count: {height}, best block: {best_hash}")

        block = await client.get_block_by_index(height - 1)
        for tx in block.tx:
            print(f"{tx.type} {tx.txid}")

        print(f"Memory pool: {len(await client.get_unconfirmed_transactions())} transactions")


if __name__ == "__main__":
    enable_rpc_logging()
    asyncio.run(main())
