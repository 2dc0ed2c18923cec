from typing import List, TYPE_CHECKING, Optional
import threading

if TYPE_CHECKING:
  from ..core.node import Node, VariableNode, ConstantNode, BinaryOpNode


class NodePool:
  """Free lists of node objects reused across trees"""

  def __init__(self, initial_size: int = 300, max_pool_size: int = 500):
    self.max_pool_size = max_pool_size
    self.variable_pool: List['VariableNode'] = []
    self.constant_pool: List['ConstantNode'] = []
    self.binary_pool: List['BinaryOpNode'] = []
    self._preallocate(initial_size)

  def _preallocate(self, size: int):
    # Import here to avoid circular imports
    from ..core.node import VariableNode, ConstantNode, BinaryOpNode

    third = size // 3
    for _ in range(third):
      self.variable_pool.append(VariableNode.__new__(VariableNode))
      self.constant_pool.append(ConstantNode.__new__(ConstantNode))
      self.binary_pool.append(BinaryOpNode.__new__(BinaryOpNode))

  def get_variable_node(self, name: str) -> 'VariableNode':
    from ..core.node import VariableNode
    if self.variable_pool:
      node = self.variable_pool.pop()
      node.__init__(name)
      return node
    return VariableNode(name)

  def get_constant_node(self, symbol: str) -> 'ConstantNode':
    from ..core.node import ConstantNode
    if self.constant_pool:
      node = self.constant_pool.pop()
      node.__init__(symbol)
      return node
    return ConstantNode(symbol)

  def get_binary_node(self, operator: str, left: 'Node', right: 'Node') -> 'BinaryOpNode':
    from ..core.node import BinaryOpNode
    if self.binary_pool:
      node = self.binary_pool.pop()
      node.__init__(operator, left, right)
      return node
    return BinaryOpNode(operator, left, right)

  def return_node(self, node: 'Node'):
    """Return a single node to the pool. Children are detached, not released."""
    from ..core.node import VariableNode, ConstantNode, BinaryOpNode

    node._clear_cache()

    if isinstance(node, BinaryOpNode):
      node.left = None
      node.right = None
      if len(self.binary_pool) < self.max_pool_size:
        self.binary_pool.append(node)
    elif isinstance(node, VariableNode) and len(self.variable_pool) < self.max_pool_size:
      self.variable_pool.append(node)
    elif isinstance(node, ConstantNode) and len(self.constant_pool) < self.max_pool_size:
      self.constant_pool.append(node)

  def release_tree(self, root: Optional['Node']) -> int:
    """Return a whole tree to the pool, children before parents.

    Iterative post-order so deep trees do not hit the recursion limit.
    Returns the number of nodes released.
    """
    from ..core.node import BinaryOpNode

    if root is None:
      return 0

    released = 0
    stack = [(root, False)]
    while stack:
      node, children_done = stack.pop()
      if isinstance(node, BinaryOpNode) and not children_done:
        stack.append((node, True))
        if node.right is not None:
          stack.append((node.right, False))
        if node.left is not None:
          stack.append((node.left, False))
        continue
      self.return_node(node)
      released += 1
    return released

  def get_stats(self) -> dict:
    """Get pool statistics"""
    return {
      'variable_pool_size': len(self.variable_pool),
      'constant_pool_size': len(self.constant_pool),
      'binary_pool_size': len(self.binary_pool),
    }

  def clear(self):
    """Clear all pools"""
    self.variable_pool.clear()
    self.constant_pool.clear()
    self.binary_pool.clear()


_GLOBAL_POOL: Optional[NodePool] = None
_POOL_LOCK = threading.Lock()


def get_global_pool() -> NodePool:
  """Get the process-wide pool, creating it on first use"""
  global _GLOBAL_POOL

  if _GLOBAL_POOL is not None:
    return _GLOBAL_POOL

  with _POOL_LOCK:
    if _GLOBAL_POOL is None:
      _GLOBAL_POOL = NodePool()

  return _GLOBAL_POOL


def clear_global_pool():
  global _GLOBAL_POOL
  with _POOL_LOCK:
    if _GLOBAL_POOL is not None:
      _GLOBAL_POOL.clear()
    _GLOBAL_POOL = None
