###########EXTERNAL IMPORTS############

from typing import Optional

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.cursor import BufferedCursor
from data.logs import LogStore

#######################################


class HTTPDependencies:
    """
    Dependency injection container for HTTP server service components.

    Dependencies are set once during server startup and then accessed by the
    route handlers through the getter methods.

    Attributes:
        cursor (BufferedCursor | None): Cursor holding the log window served to clients
        store (LogStore | None): Log source backing the cursor
    """

    def __init__(self, cursor: Optional[BufferedCursor] = None, store: Optional[LogStore] = None):

        self.cursor = cursor
        self.store = store

    def set_dependencies(self, cursor: BufferedCursor, store: LogStore) -> None:
        """
        Set all dependency instances at once during application startup.

        Args:
            cursor: BufferedCursor instance serving the log window
            store: LogStore instance backing the cursor
        """
        self.cursor = cursor
        self.store = store

    def get_cursor(self) -> BufferedCursor:
        """
        Get the BufferedCursor service instance.

        Raises:
            ValueError: If the cursor has not been initialized
        """
        if self.cursor is not None:
            return self.cursor
        raise ValueError("Cursor is not yet initialized in HTTP Dependencies")

    def get_store(self) -> LogStore:
        """
        Get the LogStore service instance.

        Raises:
            ValueError: If the log store has not been initialized
        """
        if self.store is not None:
            return self.store
        raise ValueError("Log store is not yet initialized in HTTP Dependencies")


services = HTTPDependencies()  # Global HTTPDependencies instance for application-wide dependency access.
