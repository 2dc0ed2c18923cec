"""Infix to postfix conversion (shunting-yard, left-associative)."""

from .core.operators import get_priority, is_operand, is_whitespace


def to_postfix(expression: str) -> str:
  """Convert a validated infix expression to postfix.

  The input is not re-validated. A ')' without a matching '(' drains the
  whole operator stack, and an unclosed '(' is emitted at the end.
  """
  stack = []
  postfix = []
  for ch in expression:
    if is_whitespace(ch):
      continue
    if is_operand(ch):
      postfix.append(ch)
    elif ch == '(':
      stack.append(ch)
    elif ch == ')':
      while stack and stack[-1] != '(':
        postfix.append(stack.pop())
      if stack:
        stack.pop()
    else:
      # >= pops equal priority too, which makes operators left-associative
      while stack and get_priority(stack[-1]) >= get_priority(ch):
        postfix.append(stack.pop())
      stack.append(ch)

  while stack:
    postfix.append(stack.pop())
  return ''.join(postfix)
