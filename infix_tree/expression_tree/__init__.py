"""Expression Tree Module

Validation, infix-to-postfix conversion, tree construction and evaluation
for single-character arithmetic expressions.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    evaluate_tree
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    get_priority,
    evaluate_binary_op,
    evaluate_binary_op_batch
)
from .postfix import to_postfix
from .builder import build_tree
from .optimization import NodePool, get_global_pool, clear_global_pool
from .utils import ExpressionValidator, is_valid_expression

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "evaluate_tree",
    "NodeType", "OpType", "BINARY_OP_MAP",
    "get_priority", "evaluate_binary_op", "evaluate_binary_op_batch",
    "to_postfix", "build_tree",
    "NodePool", "get_global_pool", "clear_global_pool",
    "ExpressionValidator", "is_valid_expression"
]
