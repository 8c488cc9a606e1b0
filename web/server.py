###########EXTERNAL IMPORTS############

import asyncio
import logging
from typing import List, Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn import Config, Server

#######################################

#############LOCAL IMPORTS#############

from web.dependencies import services
from controller.cursor.cursor import BufferedCursor
from data.logs import LogStore
import web.api.logs as logs
from util.debug import LoggerManager

#######################################


class HTTPServer:
    """
    Asynchronous HTTP server built with FastAPI exposing a buffered log window.

    A virtualized list frontend renders the window returned by the logs API and
    asks for more rows (load_before / load_after) or for a specific index range
    (ensure_range) as the user scrolls. Every request goes through the same
    BufferedCursor, whose internal lock serializes overlapping scroll requests.

    Components:
        - cursor (BufferedCursor): Window over the log store
        - store (LogStore): Log source backing the cursor
        - server (FastAPI): Core web application with the logs router registered

    Notes:
        - The server runs as a background asyncio task on uvicorn
        - CORS is enabled for the configured frontend origins
    """

    def __init__(self, host: str, port: int, cursor: BufferedCursor, store: LogStore, allow_origins: Optional[List[str]] = None):
        self.host = host
        self.port = port
        self.cursor = cursor
        self.store = store
        services.set_dependencies(self.cursor, self.store)  # Set dependencies for routers endpoints
        self.server = FastAPI()
        self.server.include_router(logs.router)  # Logs router (handles cursor window endpoints)
        self.server.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins or ["http://localhost:5173"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self.run_task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """
        Starts the HTTP server asynchronously using the current event loop.

        This method creates a background task that runs the FastAPI server.
        It should be called once during startup of the HTTP server component.
        """

        logger = LoggerManager.get_logger(__name__)

        try:
            if self.run_task is not None:
                raise RuntimeError("Run task is already instantiated")

            loop = asyncio.get_event_loop()
            self.run_task = loop.create_task(self.run_server())
            logger.info(f"HTTP Server listening on {self.host}:{self.port}")
        except Exception as e:
            logger.exception(f"Failed to start HTTP Server: {str(e)}")

    async def stop(self) -> None:
        """
        Stops the HTTP Server by cancelling the run task.
        """

        logger = LoggerManager.get_logger(__name__)

        try:
            if self.run_task:
                self.run_task.cancel()
                await self.run_task
                self.run_task = None

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.exception(f"Failed to stop HTTP Server: {str(e)}")

    async def run_server(self):
        """
        Asynchronously serves the FastAPI application using Uvicorn.

        Binds the server to the configured host and port with live reload
        disabled and uvicorn logging suppressed.
        """

        config = Config(app=self.server, host=self.host, port=self.port, reload=False, log_level=logging.CRITICAL + 1)
        server = Server(config)
        await server.serve()
