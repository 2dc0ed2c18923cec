"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, BinaryOpNode, evaluate_tree
from .operators import (
    NodeType, OpType, BINARY_OP_MAP,
    get_priority, is_operand, is_whitespace, truncating_div,
    evaluate_variable, evaluate_constant, evaluate_binary_op,
    evaluate_binary_op_batch, evaluate_binary_op_fast
)

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'evaluate_tree',
    'NodeType', 'OpType', 'BINARY_OP_MAP',
    'get_priority', 'is_operand', 'is_whitespace', 'truncating_div',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op',
    'evaluate_binary_op_batch', 'evaluate_binary_op_fast'
]
