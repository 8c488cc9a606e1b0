###########EXTERNAL IMPORTS############

import asyncio

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.config import load_cursor_config, load_service_config
from controller.cursor.cursor import BufferedCursor
from controller.cursor.strategies import index_strategy
from data.logs import LogStore, generate_log_records
from web.server import HTTPServer
from util.debug import LoggerManager

#######################################

CONFIG_FILE = "cursor_options.env"


async def async_main():
    """
    Main asynchronous entry point for the application.

    Responsibilities:
        - Loads the cursor and service configuration and initializes logging.
        - Builds the synthetic log store and the index-based cursor over it.
        - Bootstraps the cursor window and serves it over HTTP.
        - Keeps the event loop alive for the HTTP server background task.
    """

    service_config = load_service_config(CONFIG_FILE)
    cursor_config = load_cursor_config(CONFIG_FILE)

    # Initialize global logger
    LoggerManager.init(level=service_config.log_level)
    logger = LoggerManager.get_logger(__name__)

    store = LogStore(generate_log_records(service_config.mock_log_count))
    cursor = BufferedCursor(index_strategy(store.fetch_range), cursor_config)
    http_server = HTTPServer(host=service_config.host, port=service_config.port, cursor=cursor, store=store)

    await cursor.bootstrap()
    logger.info(f"Serving {len(store)} log records, window capacity {cursor.capacity}")
    await http_server.start()

    try:
        # Keep main loop alive to support background tasks
        while True:
            await asyncio.sleep(2)
    finally:
        await http_server.stop()
        cursor.close()


if __name__ == "__main__":
    asyncio.run(async_main())
