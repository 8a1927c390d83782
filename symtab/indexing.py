
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional, Tuple

from symtab.errors import EmptyStructureError
from symtab.fifo import Queue

logger = logging.getLogger("symtab.indexing")

_MISSING = object()


class OrderedSymbolTable(ABC):
    """Abstract base class for a key-value map ordered by its keys."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of key-value pairs in the table."""
        pass

    @abstractmethod
    def put(self, key: Any, value: Any) -> None:
        """Associate value with key, replacing any previous value."""
        pass

    @abstractmethod
    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value associated with key, or default on a search miss."""
        pass

    @abstractmethod
    def delete(self, key: Any) -> bool:
        """Remove key if present; return True if something was removed."""
        pass

    @abstractmethod
    def min(self) -> Any:
        pass

    @abstractmethod
    def max(self) -> Any:
        pass

    @abstractmethod
    def floor(self, key: Any) -> Optional[Any]:
        """Return the largest key <= key, or None."""
        pass

    @abstractmethod
    def ceiling(self, key: Any) -> Optional[Any]:
        """Return the smallest key >= key, or None."""
        pass

    @abstractmethod
    def delete_min(self) -> None:
        pass

    @abstractmethod
    def delete_max(self) -> None:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Generate the keys in ascending order."""
        pass

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        """Return True if the table holds no keys."""
        return self.size() == 0

    def __contains__(self, key: Any) -> bool:
        return self.get(key, _MISSING) is not _MISSING


class OrderedMap(OrderedSymbolTable):
    """
    Ordered symbol table backed by an (unbalanced) binary search tree.

    Each node caches the number of nodes in its subtree. Mutating operations
    descend recursively and hand back the replacement subtree, so every link
    and cached size on the search path is rewritten on the way back up.
    Nothing is reassigned until the recursion returns, which leaves the tree
    untouched if a comparison raises during the descent.

    Recursion depth equals the height of the tree; sorted insertion orders
    degrade it to a linked list.
    """

    class _Node:
        """Tree node holding one key-value pair and the size of its subtree."""
        __slots__ = 'key', 'value', 'left', 'right', 'size'

        def __init__(self, key, value, size=1, left=None, right=None):
            self.key = key
            self.value = value
            self.size = size
            self.left = left
            self.right = right

    def __init__(self):
        self._root = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size()})"

    # ------------------ Size bookkeeping ------------------
    @staticmethod
    def _size(x) -> int:
        if x is None:
            return 0
        return x.size

    def _resize(self, x):
        """Recompute x.size from its children and return x."""
        x.size = self._size(x.left) + self._size(x.right) + 1
        return x

    @staticmethod
    def _validate_key(key: Any) -> None:
        if key is None:
            raise ValueError("key must not be None")
        if key != key:  # NaN
            raise ValueError(f"key {key!r} is not totally ordered")

    def size(self) -> int:
        return self._size(self._root)

    def copy(self) -> "OrderedMap":
        """Return an independent map with the same keys, values and tree shape."""
        clone = type(self)()
        clone._root = self._clone(self._root)
        return clone

    def _clone(self, x):
        if x is None:
            return None
        return self._Node(x.key, x.value, x.size, self._clone(x.left), self._clone(x.right))

    # ------------------ Insertion & lookup ------------------
    def put(self, key: Any, value: Any) -> None:
        """Insert (key, value); on a search hit only the value is replaced."""
        self._validate_key(key)
        self._root = self._put(self._root, key, value)

    def _put(self, x, key, value):
        if x is None:
            return self._Node(key, value)

        if key < x.key:
            x.left = self._put(x.left, key, value)
        elif key > x.key:
            x.right = self._put(x.right, key, value)
        else:
            x.value = value
        return self._resize(x)

    def get(self, key: Any, default: Any = None) -> Any:
        self._validate_key(key)
        x = self._tree_search(self._root, key)
        if x is None:
            return default
        return x.value

    def _tree_search(self, x, key):
        """Return the node holding key in the subtree rooted at x, or None."""
        if x is None:
            return None

        if key < x.key:
            return self._tree_search(x.left, key)
        elif key > x.key:
            return self._tree_search(x.right, key)
        return x

    # ------------------ Order statistics ------------------
    def min(self) -> Any:
        """Return the smallest key; raises EmptyStructureError if empty."""
        if self._root is None:
            raise EmptyStructureError("min() called on an empty map")
        return self._subtree_min(self._root).key

    def max(self) -> Any:
        """Return the largest key; raises EmptyStructureError if empty."""
        if self._root is None:
            raise EmptyStructureError("max() called on an empty map")
        return self._subtree_max(self._root).key

    @staticmethod
    def _subtree_min(x):
        walk = x
        while walk.left is not None:
            walk = walk.left
        return walk

    @staticmethod
    def _subtree_max(x):
        walk = x
        while walk.right is not None:
            walk = walk.right
        return walk

    def floor(self, key: Any) -> Optional[Any]:
        self._validate_key(key)
        x = self._floor(self._root, key)
        if x is None:
            return None
        return x.key

    def _floor(self, x, key):
        if x is None:
            return None

        if key < x.key:
            return self._floor(x.left, key)
        elif key > x.key:
            # x is a candidate; a tighter floor can only sit in x.right
            local = self._floor(x.right, key)
            return x if local is None else local
        return x

    def ceiling(self, key: Any) -> Optional[Any]:
        self._validate_key(key)
        x = self._ceiling(self._root, key)
        if x is None:
            return None
        return x.key

    def _ceiling(self, x, key):
        if x is None:
            return None

        if key > x.key:
            return self._ceiling(x.right, key)
        elif key < x.key:
            local = self._ceiling(x.left, key)
            return x if local is None else local
        return x

    # ------------------ Deletion ------------------
    def delete_min(self) -> None:
        """Remove the smallest key; raises EmptyStructureError if empty."""
        if self._root is None:
            raise EmptyStructureError("delete_min() called on an empty map")
        key = self._subtree_min(self._root).key
        self._root = self._delete_min(self._root)
        logger.debug("Deleted min key: %r", key)

    def _delete_min(self, x):
        """Return subtree x without its leftmost node."""
        if x.left is None:
            return x.right
        x.left = self._delete_min(x.left)
        return self._resize(x)

    def delete_max(self) -> None:
        """Remove the largest key; raises EmptyStructureError if empty."""
        if self._root is None:
            raise EmptyStructureError("delete_max() called on an empty map")
        key = self._subtree_max(self._root).key
        self._root = self._delete_max(self._root)
        logger.debug("Deleted max key: %r", key)

    def _delete_max(self, x):
        if x.right is None:
            return x.left
        x.right = self._delete_max(x.right)
        return self._resize(x)

    def delete(self, key: Any) -> bool:
        """Remove key and its value. Deleting an absent key is a no-op."""
        self._validate_key(key)
        before = self.size()
        self._root = self._delete(self._root, key)
        deleted = self.size() < before
        if deleted:
            logger.debug("Deleted key: %r", key)
        return deleted

    def _delete(self, x, key):
        if x is None:
            return None

        if key < x.key:
            x.left = self._delete(x.left, key)
        elif key > x.key:
            x.right = self._delete(x.right, key)
        else:
            if x.left is None:
                return x.right
            if x.right is None:
                return x.left

            # Hibbard deletion: promote the in-order successor into x's place
            successor = self._subtree_min(x.right)
            successor.right = self._delete_min(x.right)
            successor.left = x.left
            x = successor
        return self._resize(x)

    # ------------------ Traversal ------------------
    def __iter__(self) -> Iterator[Any]:
        for node in self._subtree_inorder(self._root):
            yield node.key

    def keys(self) -> Iterator[Any]:
        """Generate the keys in ascending order."""
        return iter(self)

    def values(self) -> Iterator[Any]:
        """Generate the values in ascending key order."""
        for node in self._subtree_inorder(self._root):
            yield node.value

    def items(self) -> Iterator[Tuple[Any, Any]]:
        for node in self._subtree_inorder(self._root):
            yield node.key, node.value

    def _subtree_inorder(self, x) -> Iterator["OrderedMap._Node"]:
        if x is None:
            return
        yield from self._subtree_inorder(x.left)
        yield x
        yield from self._subtree_inorder(x.right)

    def level_order(self) -> Iterator[Any]:
        """Generate the keys level by level, left to right, starting at the root."""
        if self._root is None:
            return

        q = Queue()
        q.enqueue(self._root)
        while not q.is_empty():
            node = q.dequeue()
            yield node.key
            if node.left is not None:
                q.enqueue(node.left)
            if node.right is not None:
                q.enqueue(node.right)

    # ------------------ Diagnostics ------------------
    def height(self) -> int:
        """Return the number of levels on the longest root-to-leaf path."""
        return self._height(self._root)

    def _height(self, x) -> int:
        if x is None:
            return 0
        return 1 + max(self._height(x.left), self._height(x.right))

    def check(self) -> bool:
        """Return True if both the ordering and the cached sizes are consistent."""
        return self._is_ordered(self._root, None, None) and self._is_size_consistent(self._root)

    def _is_ordered(self, x, lo, hi) -> bool:
        # every key in the subtree at x must satisfy lo < key < hi
        if x is None:
            return True
        if lo is not None and not lo < x.key:
            return False
        if hi is not None and not x.key < hi:
            return False
        return self._is_ordered(x.left, lo, x.key) and self._is_ordered(x.right, x.key, hi)

    def _is_size_consistent(self, x) -> bool:
        if x is None:
            return True
        if x.size != self._size(x.left) + self._size(x.right) + 1:
            return False
        return self._is_size_consistent(x.left) and self._is_size_consistent(x.right)
