from typing import Optional
from ..core.node import Node, ConstantNode, BinaryOpNode, VariableNode, is_known_operator
from ..core.operators import DIGITS, LETTERS, is_operand, is_whitespace

_OPERATORS = frozenset('+-*/')


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(expression: str) -> bool:
    """Bracket balance and character check for a raw infix string."""
    stack = []
    for ch in expression:
      if ch == '(':
        stack.append(ch)
      elif ch == ')':
        if not stack or stack[-1] != '(':
          return False
        stack.pop()
      elif not is_operand(ch) and ch not in _OPERATORS and not is_whitespace(ch):
        return False
    return not stack

  @staticmethod
  def is_valid_tree(node: Optional[Node]) -> bool:
    if node is None:
      return False
    stack = [node]
    while stack:
      current = stack.pop()
      if isinstance(current, BinaryOpNode):
        if not is_known_operator(current.operator):
          return False
        if current.left is None or current.right is None:
          return False
        stack.append(current.right)
        stack.append(current.left)
      elif not ExpressionValidator._is_valid_leaf(current):
        return False
    return True

  @staticmethod
  def _is_valid_leaf(node: Node) -> bool:
    if isinstance(node, ConstantNode):
      return node.symbol in DIGITS and 0 <= node.value <= 9

    elif isinstance(node, VariableNode):
      return node.name in LETTERS

    return False


def is_valid_expression(expression: str) -> bool:
  return ExpressionValidator.is_valid_expression(expression)
