###########EXTERNAL IMPORTS############

from collections import deque
from typing import Generic, Deque, Dict, Iterator, List, Optional, Sequence, TypeVar

#######################################

#############LOCAL IMPORTS#############

from model.cursor import Entry

#######################################

K = TypeVar("K")
V = TypeVar("V")


class EntryWindow(Generic[K, V]):
    """
    Ordered double-ended window of entries.

    Entries are kept ascending by key with no duplicate keys. A key index is
    maintained next to the deque so membership and point lookups do not scan
    the window. The window does not enforce a capacity by itself; eviction is
    decided by the cursor trim policy and applied with drop_front / drop_back.
    """

    def __init__(self) -> None:
        self.items: Deque[Entry[K, V]] = deque()
        self.index: Dict[K, Entry[K, V]] = {}

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Entry[K, V]]:
        return iter(self.items)

    def __contains__(self, key: object) -> bool:
        return key in self.index

    def get(self, key: K) -> Optional[Entry[K, V]]:
        """Returns the entry stored under key, or None if it is not in the window."""

        return self.index.get(key)

    def peek_front(self) -> Optional[Entry[K, V]]:
        """Returns the entry with the smallest key, or None if the window is empty."""

        return self.items[0] if self.items else None

    def peek_back(self) -> Optional[Entry[K, V]]:
        """Returns the entry with the largest key, or None if the window is empty."""

        return self.items[-1] if self.items else None

    def extend_back(self, entries: Sequence[Entry[K, V]]) -> None:
        """
        Appends entries after the current back entry.

        Args:
            entries: Entries sorted ascending, all with keys greater than the
                current back key and not already present.
        """

        for entry in entries:
            self.items.append(entry)
            self.index[entry.key] = entry

    def extend_front(self, entries: Sequence[Entry[K, V]]) -> None:
        """
        Prepends entries before the current front entry.

        Args:
            entries: Entries sorted ascending, all with keys smaller than the
                current front key and not already present.
        """

        for entry in reversed(entries):
            self.items.appendleft(entry)
            self.index[entry.key] = entry

    def drop_front(self, count: int) -> None:
        """Removes count entries from the front of the window."""

        for _ in range(min(count, len(self.items))):
            entry = self.items.popleft()
            del self.index[entry.key]

    def drop_back(self, count: int) -> None:
        """Removes count entries from the back of the window."""

        for _ in range(min(count, len(self.items))):
            entry = self.items.pop()
            del self.index[entry.key]

    def replace(self, entries: Sequence[Entry[K, V]]) -> None:
        """Replaces the window contents with entries (sorted ascending, unique keys)."""

        self.clear()
        self.extend_back(entries)

    def clear(self) -> None:
        self.items.clear()
        self.index.clear()

    def get_list(self) -> List[Entry[K, V]]:
        """
        Returns the current window contents as a list.

        Returns:
            A new list of entries ordered ascending by key.
        """

        return list(self.items)
