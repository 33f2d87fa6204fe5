import asyncio

from ledger.app.core.database import init_models
from ledger.app.core.logging_config import configure_logging


if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_models())
    print("Database tables updated.")
