"""Fetch every order of a market and summarize them by state."""

import argparse
import asyncio
from collections import Counter

from budaclient import ClientConfig, Config, Credentials, RestClient
from budaclient.errors import BudaError
from budaclient.utils.logger import logger


async def fetch_orders(market_id: str, state: str | None) -> None:
    """Fetch all pages of a market's orders."""
    if not Config.validate():
        logger.error(
            "API credentials not found!\n"
            "Please set BUDA_API_KEY and BUDA_API_SECRET in .env file"
        )
        return

    config = ClientConfig.from_env()
    credentials = Credentials(Config.API_KEY, Config.API_SECRET)
    logger.info(f"REST URL: {config.base_url}")

    async with RestClient(credentials=credentials, config=config) as client:
        try:
            orders = await client.get_orders(market_id, state=state)
        except BudaError as e:
            logger.error(f"Failed to fetch orders: {e}")
            return

    logger.info(f"{market_id}: {len(orders)} orders")
    for order_state, count in Counter(o.state for o in orders).most_common():
        logger.info(f"  {order_state}: {count}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("market_id", help="Market ID, e.g. BTC-CLP")
    parser.add_argument("--state", help="Only orders in this state")
    args = parser.parse_args()

    asyncio.run(fetch_orders(args.market_id, args.state))
