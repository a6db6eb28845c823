"""A FIFO list of objects with optional per-item release callbacks."""

from collections import deque

from locutils.log_util import loc_logger

__all__ = ["LinkedListError", "LinkedList"]


class LinkedListError(Exception):
    """A list operation failed; ``code`` tells why."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5

    def __init__(self, code, message=""):
        super().__init__(message or f"linked list error {code}")
        self.code = code


class LinkedList:
    """Items are added at the head and removed from the tail, oldest first.

    Each item may carry a ``dealloc`` callable that is called with the item
    when the list discards it (on :meth:`flush`, or on a removing
    :meth:`search` whose caller does not take the item).
    """

    def __init__(self):
        # Index 0 is the head (newest), the right end is the tail (oldest).
        self._elements = deque()

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        """Iterate over the items from head (newest) to tail (oldest)."""
        return (item for item, _ in self._elements)

    def add(self, item, dealloc=None):
        """Add ``item`` at the head of the list."""
        loc_logger.debug("%s: Adding to list data_obj = %r", "add", item)
        if item is None:
            loc_logger.error("%s: Invalid input parameter!", "add")
            raise LinkedListError(LinkedListError.INVALID_PARAMETER, "item must not be None")
        self._elements.appendleft((item, dealloc))

    def remove(self):
        """Remove and return the item at the tail, the oldest one added."""
        loc_logger.debug("%s: Removing from list", "remove")
        if not self._elements:
            raise LinkedListError(LinkedListError.UNAVAILABLE_RESOURCE, "list is empty")
        item, _ = self._elements.pop()
        return item

    def is_empty(self):
        """Tell whether the list holds no items."""
        return not self._elements

    def flush(self):
        """Remove every item, calling each item's ``dealloc`` if it has one."""
        while self._elements:
            item, dealloc = self._elements.popleft()
            if dealloc is not None:
                dealloc(item)

    def search(self, equal, key=None, remove=False, take=True):
        """Find the first item, from the head, for which ``equal(key, item)`` holds.

        Returns the item found, or None when nothing matches. With ``remove``
        the item is taken out of the list; if ``take`` is false as well, its
        ``dealloc`` is called because the caller does not keep it.
        """
        loc_logger.debug("%s: Search the list", "search")
        if equal is None:
            loc_logger.error("%s: Invalid list parameter! equal %r", "search", equal)
            raise LinkedListError(LinkedListError.INVALID_HANDLE, "no comparison function")
        if not self._elements:
            raise LinkedListError(LinkedListError.UNAVAILABLE_RESOURCE, "list is empty")

        found = next(
            ((index, item, dealloc)
             for index, (item, dealloc) in enumerate(self._elements)
             if equal(key, item)),
            None,
        )
        if found is None:
            return None
        index, item, dealloc = found
        if remove:
            del self._elements[index]
            if not take and dealloc is not None:
                dealloc(item)
        return item