"""Expression tree construction from postfix."""

from typing import List
from .core.node import Node
from .core.operators import DIGITS, is_operand
from .expression import Expression
from .optimization.memory_pool import get_global_pool
from ..errors import MalformedPostfix
from ..logging_system import log_debug


def build_tree(postfix: str) -> Expression:
  """Build an expression tree from a postfix string.

  Operands become leaves; every other character becomes an operator node
  whose first popped value is the right child. Raises MalformedPostfix if an
  operator lacks two operands or more than one value is left over. Nodes
  allocated before the failure are returned to the pool.
  """
  pool = get_global_pool()
  stack: List[Node] = []
  try:
    for ch in postfix:
      if is_operand(ch):
        if ch in DIGITS:
          stack.append(pool.get_constant_node(ch))
        else:
          stack.append(pool.get_variable_node(ch))
      else:
        if len(stack) < 2:
          raise MalformedPostfix(postfix, f"operator {ch!r} needs two operands")
        right = stack.pop()
        left = stack.pop()
        stack.append(pool.get_binary_node(ch, left, right))

    if len(stack) != 1:
      raise MalformedPostfix(postfix, f"expected one value, found {len(stack)}")
  except MalformedPostfix:
    for node in stack:
      pool.release_tree(node)
    raise

  expression = Expression(stack.pop())
  log_debug(f"Built tree from {len(postfix)}-token postfix")
  return expression
