import numpy as np
from typing import Optional, Mapping
from .core.node import Node, evaluate_tree
from .optimization.memory_pool import get_global_pool
import sympy as sp


class Expression:
  """Owning handle around an expression tree.

  Use it as a context manager to release the tree back to the node pool
  when done; a released expression has no root and evaluates to 0.
  """

  __slots__ = ('root', '_string_cache', '_postfix_cache')

  def __init__(self, root: Optional[Node]):
    self.root = root
    self._string_cache: Optional[str] = None
    self._postfix_cache: Optional[str] = None

  def evaluate(self, bindings: Optional[Mapping[str, int]] = None) -> int:
    return evaluate_tree(self.root, bindings if bindings is not None else {})

  def evaluate_batch(self, bindings: Mapping[str, object]) -> np.ndarray:
    """Evaluate the tree once per row of the given binding arrays.

    Each binding is a 1-D integer array (or a scalar, broadcast to every
    row); all arrays must share the same length. Returns an int64 array.
    """
    arrays = {}
    n_samples = None
    for name, values in bindings.items():
      arr = np.asarray(values, dtype=np.int64)
      if arr.ndim > 1:
        raise ValueError(f"Binding for {name!r} must be one-dimensional")
      if arr.ndim == 1:
        if n_samples is not None and arr.shape[0] != n_samples:
          raise ValueError(
            f"Binding for {name!r} has {arr.shape[0]} rows, expected {n_samples}")
        n_samples = arr.shape[0]
      arrays[name] = arr
    if n_samples is None:
      n_samples = 1
    for name, arr in arrays.items():
      if arr.ndim == 0:
        arrays[name] = np.full(n_samples, arr, dtype=np.int64)
      else:
        arrays[name] = np.ascontiguousarray(arr)

    if self.root is None:
      return np.zeros(n_samples, dtype=np.int64)
    return self.root.evaluate_batch(arrays, n_samples)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string() if self.root is not None else ""
    return self._string_cache

  def to_postfix(self) -> str:
    if self._postfix_cache is None:
      self._postfix_cache = self.root.to_postfix() if self.root is not None else ""
    return self._postfix_cache

  def to_sympy(self) -> sp.Expr:
    if self.root is None:
      return sp.Integer(0)
    return self.root.to_sympy()

  def copy(self) -> 'Expression':
    return Expression(self.root.copy() if self.root is not None else None)

  def size(self) -> int:
    """Node count"""
    return self.root.size() if self.root is not None else 0

  def clear_cache(self):
    self._string_cache = None
    self._postfix_cache = None

  def release(self) -> int:
    """Return every node to the pool, children first. Safe to call twice."""
    root, self.root = self.root, None
    self.clear_cache()
    return get_global_pool().release_tree(root)

  @property
  def released(self) -> bool:
    return self.root is None

  def __enter__(self) -> 'Expression':
    return self

  def __exit__(self, exc_type, exc_value, traceback):
    self.release()
    return False

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return hash(self) == hash(other)

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"

  @classmethod
  def from_string(cls, expression: str) -> 'Expression':
    """Validate, convert and build in one step."""
    from .utils.validator import ExpressionValidator
    from .postfix import to_postfix
    from .builder import build_tree
    from ..errors import InvalidExpression

    if not ExpressionValidator.is_valid_expression(expression):
      raise InvalidExpression(expression)
    return build_tree(to_postfix(expression))
