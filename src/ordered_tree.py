from typing import TypeVar, Generic, Callable, List, Iterator, Optional

T = TypeVar('T')

# Height returned for an unbalanced subtree by _balanced_height.
UNBALANCED = -2


class TreeError(ValueError):
    pass


class EmptyTreeError(TreeError):
    pass


class KeyNotFoundError(TreeError):
    pass


class OrderedTree(Generic[T]):
    """Unbalanced binary search tree of unique keys.

    Keys need only support ``==`` and ``<``. Inserting a key equal to a
    stored one replaces the stored value in place.
    """

    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['OrderedTree.Node'] = None
            self.right: Optional['OrderedTree.Node'] = None

        def is_leaf(self) -> bool:
            return self.left is None and self.right is None

        def is_half(self) -> bool:
            return (self.left is None) != (self.right is None)

    def __init__(self) -> None:
        self._root: Optional[OrderedTree.Node] = None
        self._size: int = 0

    def insert(self, value: T) -> None:
        if self._root is None:
            self._root = OrderedTree.Node(value)
            self._size += 1
            return

        node = self._root
        while True:
            if value == node.value:
                node.value = value
                return
            if value < node.value:
                if node.left is None:
                    node.left = OrderedTree.Node(value)
                    self._size += 1
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = OrderedTree.Node(value)
                    self._size += 1
                    return
                node = node.right

    def contains(self, value: T) -> bool:
        return self._search(value) is not None

    def remove(self, key: T) -> bool:
        """Remove the value equal to ``key``. Returns False if it is absent."""
        node = self._search(key)
        if node is None:
            return False
        self._remove_node(node)
        self._size -= 1
        return True

    def retrieve(self, key: T) -> T:
        """Return the stored value equal to ``key``.

        Useful when equality only looks at part of the value and the caller
        wants the full stored record back.
        """
        if self._root is None:
            raise EmptyTreeError("tree empty on retrieve()")
        node = self._search(key)
        if node is None:
            raise KeyNotFoundError("non-existent key on retrieve()")
        return node.value

    def min(self) -> T:
        if self._root is None:
            raise EmptyTreeError("min from empty tree")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.value

    def max(self) -> T:
        if self._root is None:
            raise EmptyTreeError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Height of the tree; -1 when empty, 0 for a lone root."""
        heights = {}
        for node in self._post_order_nodes():
            heights[id(node)] = 1 + max(heights.get(id(node.left), -1),
                                        heights.get(id(node.right), -1))
        if self._root is None:
            return -1
        return heights[id(self._root)]

    def count_leaves(self) -> int:
        return sum(1 for node in self._pre_order_nodes() if node.is_leaf())

    def count_halves(self) -> int:
        return sum(1 for node in self._pre_order_nodes() if node.is_half())

    def is_balanced(self) -> bool:
        """True when, at every node, the subtree heights differ by at most one."""
        return self._balanced_height() != UNBALANCED

    def is_perfect(self) -> bool:
        return self._size == 2 ** (self.height() + 1) - 1

    def trim(self) -> None:
        """Remove every node that is a leaf when the call starts.

        Nodes that only become leaves because their children were trimmed
        stay in the tree.
        """
        root = self._root
        if root is None:
            return
        if root.is_leaf():
            self._root = None
            self._size -= 1
            return

        stack: List[OrderedTree.Node] = [root]
        while stack:
            node = stack.pop()
            if node.right is not None:
                if node.right.is_leaf():
                    node.right = None
                    self._size -= 1
                else:
                    stack.append(node.right)
            if node.left is not None:
                if node.left.is_leaf():
                    node.left = None
                    self._size -= 1
                else:
                    stack.append(node.left)

    def clear(self) -> None:
        """Release every node, children before parents."""
        for node in self._post_order_nodes():
            node.left = None
            node.right = None
        self._root = None
        self._size = 0

    def preorder_traverse(self, visit: Callable[[T], None]) -> None:
        for value in [node.value for node in self._pre_order_nodes()]:
            visit(value)

    def inorder_traverse(self, visit: Callable[[T], None]) -> None:
        for value in [node.value for node in self._in_order_nodes()]:
            visit(value)

    def postorder_traverse(self, visit: Callable[[T], None]) -> None:
        for value in [node.value for node in self._post_order_nodes()]:
            visit(value)

    def in_order(self) -> List[T]:
        result: List[T] = []
        self.inorder_traverse(result.append)
        return result

    def pre_order(self) -> List[T]:
        result: List[T] = []
        self.preorder_traverse(result.append)
        return result

    def post_order(self) -> List[T]:
        result: List[T] = []
        self.postorder_traverse(result.append)
        return result

    def _search(self, value: T) -> Optional[Node]:
        node = self._root
        while node is not None:
            if value == node.value:
                return node
            if value < node.value:
                node = node.left
            else:
                node = node.right
        return None

    def _find_parent(self, node: Node) -> Optional[Node]:
        """Re-descend from the root until ``node`` shows up as a child slot."""
        current = self._root
        while current is not None and current is not node:
            if node.value < current.value:
                if current.left is node:
                    return current
                current = current.left
            else:
                if current.right is node:
                    return current
                current = current.right
        return None

    def _remove_node(self, node: Node) -> None:
        if node.left is not None and node.right is not None:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            value = successor.value
            self._remove_node(successor)
            node.value = value
            return

        replacement = node.left if node.left is not None else node.right
        parent = self._find_parent(node)
        if parent is None:
            self._root = replacement
        elif parent.left is node:
            parent.left = replacement
        else:
            parent.right = replacement
        node.left = None
        node.right = None

    def _balanced_height(self) -> int:
        heights = {}
        for node in self._post_order_nodes():
            left = heights.get(id(node.left), -1)
            right = heights.get(id(node.right), -1)
            if abs(left - right) > 1:
                return UNBALANCED
            heights[id(node)] = 1 + max(left, right)
        return heights.get(id(self._root), -1)

    def _pre_order_nodes(self) -> List[Node]:
        result: List[OrderedTree.Node] = []
        if self._root is None:
            return result
        stack: List[OrderedTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def _in_order_nodes(self) -> List[Node]:
        result: List[OrderedTree.Node] = []
        stack: List[OrderedTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node)
            node = node.right
        return result

    def _post_order_nodes(self) -> List[Node]:
        result: List[OrderedTree.Node] = []
        if self._root is None:
            return result
        stack: List[OrderedTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"OrderedTree({self.in_order()})"

    def __str__(self) -> str:
        return f"OrderedTree(size={self._size})"
