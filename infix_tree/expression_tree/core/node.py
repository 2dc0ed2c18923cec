import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Mapping
from .operators import (
  NodeType, BINARY_OP_MAP,
  evaluate_variable, evaluate_constant, evaluate_binary_op,
  evaluate_constant_batch, evaluate_binary_op_batch
)
from ...errors import UndefinedVariable, InvalidOperator


class Node(ABC):
  """Base node class with size and hash caching"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  def _clear_cache(self):
    self._hash_cache = None
    self._size_cache = None

  @abstractmethod
  def evaluate(self, bindings: Mapping[str, int]) -> int:
    pass

  @abstractmethod
  def evaluate_batch(self, bindings: Mapping[str, np.ndarray], n_samples: int) -> np.ndarray:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def to_postfix(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = self._compute_size()
    return self._size_cache

  @abstractmethod
  def _compute_size(self) -> int:
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass


class ConstantNode(Node):
  """Single decimal digit operand"""

  __slots__ = ('symbol', 'value')

  def __init__(self, symbol: str):
    super().__init__()
    self.symbol = symbol
    self.value = evaluate_constant(symbol)

  def evaluate(self, bindings: Mapping[str, int]) -> int:
    return self.value

  def evaluate_batch(self, bindings: Mapping[str, np.ndarray], n_samples: int) -> np.ndarray:
    return evaluate_constant_batch(n_samples, self.value)

  def to_string(self) -> str:
    return self.symbol

  def to_postfix(self) -> str:
    return self.symbol

  def copy(self) -> 'ConstantNode':
    from ..optimization.memory_pool import get_global_pool
    return get_global_pool().get_constant_node(self.symbol)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, self.value))

  def to_sympy(self):
    return sp.Integer(self.value)


class VariableNode(Node):
  """Single letter operand, resolved through the bindings table"""

  __slots__ = ('name',)

  def __init__(self, name: str):
    super().__init__()
    self.name = name

  def evaluate(self, bindings: Mapping[str, int]) -> int:
    return evaluate_variable(bindings, self.name)

  def evaluate_batch(self, bindings: Mapping[str, np.ndarray], n_samples: int) -> np.ndarray:
    if self.name not in bindings:
      raise UndefinedVariable(self.name)
    return bindings[self.name].copy()

  def to_string(self) -> str:
    return self.name

  def to_postfix(self) -> str:
    return self.name

  def copy(self) -> 'VariableNode':
    from ..optimization.memory_pool import get_global_pool
    return get_global_pool().get_variable_node(self.name)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name))

  def to_sympy(self):
    return sp.Symbol(self.name)


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    self.operator = operator
    self.left = left
    self.right = right

  def evaluate(self, bindings: Mapping[str, int]) -> int:
    # Left subtree first, then right
    return fold_tree(
      self,
      lambda leaf: 0 if leaf is None else leaf.evaluate(bindings),
      lambda node, left, right: evaluate_binary_op(left, right, node.operator))

  def evaluate_batch(self, bindings: Mapping[str, np.ndarray], n_samples: int) -> np.ndarray:
    return fold_tree(
      self,
      lambda leaf: leaf.evaluate_batch(bindings, n_samples),
      lambda node, left, right: evaluate_binary_op_batch(left, right, node.operator))

  def to_string(self) -> str:
    return fold_tree(
      self,
      lambda leaf: leaf.to_string(),
      lambda node, left, right: f"({left} {node.operator} {right})")

  def to_postfix(self) -> str:
    return fold_tree(
      self,
      lambda leaf: leaf.to_postfix(),
      lambda node, left, right: left + right + node.operator)

  def copy(self) -> 'BinaryOpNode':
    from ..optimization.memory_pool import get_global_pool
    pool = get_global_pool()
    return fold_tree(
      self,
      lambda leaf: leaf.copy(),
      lambda node, left, right: pool.get_binary_node(node.operator, left, right))

  def _compute_size(self) -> int:
    return fold_tree(self, lambda leaf: leaf.size(), _combine_size)

  def _compute_hash(self) -> int:
    return fold_tree(self, hash, _combine_hash)

  def to_sympy(self):
    return fold_tree(self, lambda leaf: leaf.to_sympy(), _combine_sympy)


def fold_tree(root: Node, leaf_fn: Callable[[Node], Any],
              combine_fn: Callable[[BinaryOpNode, Any, Any], Any]) -> Any:
  """Post-order reduction of a tree without recursion.

  The left subtree is always finished before the right one is started, so
  errors surface in left-to-right order. Absent children are passed to
  leaf_fn as None.
  """
  values: List[Any] = []
  stack = [(root, False)]
  while stack:
    node, children_done = stack.pop()
    if isinstance(node, BinaryOpNode):
      if children_done:
        right = values.pop()
        left = values.pop()
        values.append(combine_fn(node, left, right))
      else:
        stack.append((node, True))
        stack.append((node.right, False))
        stack.append((node.left, False))
    else:
      values.append(leaf_fn(node))
  return values.pop()


def _combine_size(node: BinaryOpNode, left: int, right: int) -> int:
  node._size_cache = 1 + left + right
  return node._size_cache


def _combine_hash(node: BinaryOpNode, left: int, right: int) -> int:
  node._hash_cache = hash((NodeType.BINARY_OP, node.operator, left, right))
  return node._hash_cache


def _combine_sympy(node: BinaryOpNode, left, right):
  if node.operator == '+':
    return sp.Add(left, right)
  elif node.operator == '-':
    return sp.Add(left, sp.Mul(-1, right))
  elif node.operator == '*':
    return sp.Mul(left, right)
  elif node.operator == '/':
    # Exact division; the integer evaluator truncates instead
    return sp.Mul(left, sp.Pow(right, -1))
  raise InvalidOperator(node.operator)


def evaluate_tree(node: Optional[Node], bindings: Mapping[str, int]) -> int:
  """Evaluate a tree for one bindings table. An absent tree evaluates to 0."""
  if node is None:
    return 0
  return node.evaluate(bindings)


def is_known_operator(operator: str) -> bool:
  return operator in BINARY_OP_MAP
