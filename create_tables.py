import asyncio
import logging
import selectors
import sys

from outlet_admin.database import AsyncSessionLocal, Base, engine
from outlet_admin.hotels import models as hotel_models  # noqa: F401
from outlet_admin.outbox import models as outbox_models  # noqa: F401
from outlet_admin.restaurants import models as restaurant_models  # noqa: F401
from outlet_admin.seed import seed_demo_data

logger = logging.getLogger("create_tables")


async def main(seed: bool = False):
    logger.info("Connecting to %s", engine.url.render_as_string(hide_password=True))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")

    if seed:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed = "--seed" in sys.argv[1:]
    if sys.platform == 'win32':
        loop_factory = lambda: asyncio.SelectorEventLoop(selectors.SelectSelector())
        asyncio.run(main(seed), loop_factory=loop_factory)
    else:
        asyncio.run(main(seed))
