"""Utilities for expression trees."""

from .validator import ExpressionValidator, is_valid_expression
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    find_nodes_by_operator, get_variables, get_variable_usage_counts,
    get_constants, get_binary_ops, clone_tree
)

__all__ = [
    'ExpressionValidator', 'is_valid_expression',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'find_nodes_by_operator', 'get_variables', 'get_variable_usage_counts',
    'get_constants', 'get_binary_ops', 'clone_tree'
]
