"""Array-backed binary min-heap ordered by an injected comparator.

The heap keeps its elements in a list whose length is the current capacity.
Positions ``0 .. size - 1`` form a complete binary tree rooted at index ``0``
where the node at ``i`` has children ``2i + 1`` and ``2i + 2`` and parent
``(i - 1) // 2``. Every node compares less than or equal to its children.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from .exceptions import EmptyContainerError, InvalidArgumentError

T = TypeVar("T")
Comparator = Callable[[T, T], int]

DEFAULT_INITIAL_CAPACITY = 16
ROOT_INDEX = 0


def natural_order(a: Any, b: Any) -> int:
    """Three-way comparison using ``<`` and ``>``."""
    return (a > b) - (a < b)


def _parent(index: int) -> int:
    return (index - 1) // 2


def _left_child(index: int) -> int:
    return 2 * index + 1


def _right_child(index: int) -> int:
    return 2 * index + 2


class BinaryHeap(Generic[T]):
    """Priority queue returning the smallest element first.

    Args:
        comparator: Three-way comparison ``cmp(a, b)`` returning a negative
            number, zero or a positive number. Defaults to
            :func:`natural_order`.
        initial_capacity: Number of slots allocated up front. Storage doubles
            whenever an insertion would not fit.

    Raises:
        InvalidArgumentError: If ``initial_capacity`` is smaller than one.

    Examples:
        ```python
        >>> h = BinaryHeap.of(5, 3, 8)
        >>> h.minimum()
        3
        >>> h.delete_minimum()
        >>> h.minimum()
        5
        ```
    """

    def __init__(
        self,
        comparator: Optional[Comparator[T]] = None,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
    ) -> None:
        if (
            not isinstance(initial_capacity, int)
            or isinstance(initial_capacity, bool)
            or initial_capacity < 1
        ):
            raise InvalidArgumentError("initial capacity must be greater than 0")
        self._comparator: Comparator[T] = comparator or natural_order
        self._elements: List[Optional[T]] = [None] * initial_capacity
        self._size = 0

    # ---- factories ----------------------------------------------------

    @classmethod
    def empty(cls, comparator: Optional[Comparator[T]] = None) -> "BinaryHeap[T]":
        """Return an empty heap with the default capacity."""
        return cls(comparator, DEFAULT_INITIAL_CAPACITY)

    @classmethod
    def with_capacity(
        cls, initial_capacity: int, comparator: Optional[Comparator[T]] = None
    ) -> "BinaryHeap[T]":
        """Return an empty heap with ``initial_capacity`` slots."""
        return cls(comparator, initial_capacity)

    @classmethod
    def of(cls, *elements: T, comparator: Optional[Comparator[T]] = None) -> "BinaryHeap[T]":
        """Build a heap holding ``elements`` in linear time."""
        return cls.from_iterable(elements, comparator=comparator)

    @classmethod
    def from_iterable(
        cls, iterable: Iterable[T], comparator: Optional[Comparator[T]] = None
    ) -> "BinaryHeap[T]":
        """Build a heap from ``iterable`` in linear time.

        Elements are copied into storage as they come and then sifted down
        from the last internal node back to the root, which costs ``O(n)``
        instead of the ``O(n log n)`` of repeated insertion.
        """
        items = list(iterable)
        heap = cls(comparator, max(1, len(items)))
        heap._elements[: len(items)] = items
        heap._size = len(items)
        for index in range(heap._size // 2 - 1, ROOT_INDEX - 1, -1):
            heap._heapify_down(index)
        return heap

    @classmethod
    def copy_of(cls, that: "BinaryHeap[T]") -> "BinaryHeap[T]":
        """Return an independent heap with the same comparator and elements."""
        heap = cls(that._comparator, len(that._elements))
        heap._elements[: that._size] = that._elements[: that._size]
        heap._size = that._size
        return heap

    # ---- queries ------------------------------------------------------

    @property
    def comparator(self) -> Comparator[T]:
        """Comparator that defines the ordering of this heap."""
        return self._comparator

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._elements)

    def is_empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> Iterator[T]:
        """Iterate over stored elements in level order."""
        for index in range(self._size):
            yield self._elements[index]  # type: ignore[misc]

    def minimum(self) -> T:
        """Return the smallest element without removing it.

        Raises:
            EmptyContainerError: If the heap holds no elements.
        """
        if self._size == 0:
            raise EmptyContainerError("minimum on empty heap")
        return self._elements[ROOT_INDEX]  # type: ignore[return-value]

    # ---- mutation -----------------------------------------------------

    def insert(self, element: T) -> None:
        """Add ``element``, restoring heap order by sifting it up."""
        self._ensure_capacity()
        self._elements[self._size] = element
        self._heapify_up(self._size)
        self._size += 1

    def delete_minimum(self) -> None:
        """Remove the smallest element.

        Raises:
            EmptyContainerError: If the heap holds no elements.
        """
        if self._size == 0:
            raise EmptyContainerError("delete_minimum on empty heap")
        last = self._size - 1
        self._elements[ROOT_INDEX] = self._elements[last]
        self._elements[last] = None
        self._size = last
        self._heapify_down(ROOT_INDEX)

    def extract_minimum(self) -> T:
        """Remove and return the smallest element."""
        element = self.minimum()
        self.delete_minimum()
        return element

    def clear(self) -> None:
        """Remove every element, keeping the allocated capacity."""
        for index in range(self._size):
            self._elements[index] = None
        self._size = 0

    # ---- internals ----------------------------------------------------

    def _ensure_capacity(self) -> None:
        if self._size == len(self._elements):
            self._elements.extend([None] * len(self._elements))

    def _less_than(self, index1: int, index2: int) -> bool:
        return self._comparator(self._elements[index1], self._elements[index2]) < 0  # type: ignore[arg-type]

    def _swap(self, index1: int, index2: int) -> None:
        elements = self._elements
        elements[index1], elements[index2] = elements[index2], elements[index1]

    def _is_leaf(self, index: int) -> bool:
        # complete tree: no left child implies no right child
        return _left_child(index) >= self._size

    def _heapify_up(self, index: int) -> None:
        while index != ROOT_INDEX:
            parent = _parent(index)
            if not self._less_than(index, parent):
                break
            self._swap(index, parent)
            index = parent

    def _heapify_down(self, index: int) -> None:
        while not self._is_leaf(index):
            chosen = _left_child(index)
            right = _right_child(index)
            if right < self._size and self._less_than(right, chosen):
                chosen = right
            if self._less_than(index, chosen):
                break
            self._swap(index, chosen)
            index = chosen

    def __repr__(self) -> str:
        # Nested Node(left, value, right) rendering built with an explicit stack.
        out: List[str] = []
        stack: List[Any] = [ROOT_INDEX]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                out.append(item)
            elif item >= self._size:
                out.append("null")
            else:
                stack.extend(
                    [")", _right_child(item), ", ", str(self._elements[item]), ", ", _left_child(item), "Node("]
                )
        return f"{type(self).__name__}({''.join(out)})"


__all__ = [
    "BinaryHeap",
    "Comparator",
    "DEFAULT_INITIAL_CAPACITY",
    "natural_order",
]
