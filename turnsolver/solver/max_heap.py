"""
MaxHeap Module - Array-backed binary max-heap.

Building block for strategies that keep a priority frontier or an
online best-k set. Items only need to support the < operator.
"""

from typing import Generic, List, TypeVar

T = TypeVar("T")


class MaxHeap(Generic[T]):
    """
    Binary max-heap with 1-based implicit tree layout.

    Slot 0 of the backing list is an unused sentinel, so the children
    of node i live at 2i and 2i+1 and its parent at i // 2.
    Invariant: every node is >= both of its children.
    """

    def __init__(self):
        self._items: List = [None]

    def __len__(self) -> int:
        return len(self._items) - 1

    def is_empty(self) -> bool:
        return len(self._items) == 1

    def insert(self, item: T) -> None:
        """Append item and bubble it up while its parent is smaller."""
        self._items.append(item)
        self._bubble_up(len(self._items) - 1)

    def peek(self) -> T:
        """
        Get the largest item without removing it.

        Raises:
            IndexError: If heap is empty
        """
        if self.is_empty():
            raise IndexError("peek from empty heap")
        return self._items[1]

    def extract_max(self) -> T:
        """
        Remove and return the largest item.

        Returns:
            Root item

        Raises:
            IndexError: If heap is empty
        """
        if self.is_empty():
            raise IndexError("extract_max from empty heap")
        items = self._items
        top = items[1]
        last = len(items) - 1
        items[1], items[last] = items[last], items[1]
        items.pop()
        if len(items) > 1:
            self._bubble_down(1)
        return top

    def _bubble_up(self, index: int) -> None:
        items = self._items
        while index > 1:
            parent = index // 2
            if not items[parent] < items[index]:
                break
            items[parent], items[index] = items[index], items[parent]
            index = parent

    def _bubble_down(self, index: int) -> None:
        items = self._items
        size = len(items) - 1
        while True:
            left = index * 2
            right = left + 1
            largest = index
            if left <= size and items[largest] < items[left]:
                largest = left
            if right <= size and items[largest] < items[right]:
                largest = right
            if largest == index:
                return
            items[index], items[largest] = items[largest], items[index]
            index = largest
