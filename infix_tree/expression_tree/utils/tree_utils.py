"""
Tree Utility Functions

Traversal and inspection helpers for expression trees.
"""

from typing import List, Dict, Optional
from collections import Counter

from ..core.node import Node, BinaryOpNode, ConstantNode, VariableNode, fold_tree


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default), 'depth_first' (pre-order)
            or 'post_order' (children before parents)

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    elif traversal_order == 'post_order':
        return _post_order_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)

        if isinstance(current_node, BinaryOpNode):
            nodes_to_visit.append(current_node.left)
            nodes_to_visit.append(current_node.right)

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (iterative)"""
    nodes = []
    stack = [node]

    while stack:
        current_node = stack.pop()
        nodes.append(current_node)
        if isinstance(current_node, BinaryOpNode):
            stack.append(current_node.right)  # LIFO: left is visited first
            stack.append(current_node.left)

    return nodes


def _post_order_traversal(node: Node) -> List[Node]:
    """Children before parents: reverse of a root-right-left walk"""
    nodes = []
    stack = [node]

    while stack:
        current_node = stack.pop()
        nodes.append(current_node)
        if isinstance(current_node, BinaryOpNode):
            stack.append(current_node.left)
            stack.append(current_node.right)

    nodes.reverse()
    return nodes


def calculate_tree_depth(node: Optional[Node]) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1, an absent tree 0)
    """
    if node is None:
        return 0
    return fold_tree(node, lambda leaf: 1, lambda _, left, right: 1 + max(left, right))


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def find_nodes_by_operator(node: Node, operator: str) -> List[BinaryOpNode]:
    """
    Find all operator nodes carrying the given operator character.

    Args:
        node: Root node of the tree
        operator: One of '+', '-', '*', '/'

    Returns:
        List of matching BinaryOpNode instances, breadth-first
    """
    return [n for n in get_all_nodes(node)
            if isinstance(n, BinaryOpNode) and n.operator == operator]


def get_variables(node: Node) -> List[str]:
    """Distinct variable names in order of first appearance (left to right)"""
    seen = []
    for n in get_all_nodes(node, 'depth_first'):
        if isinstance(n, VariableNode) and n.name not in seen:
            seen.append(n.name)
    return seen


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    counts = Counter(n.name for n in get_all_nodes(node) if isinstance(n, VariableNode))
    return dict(counts)


def get_constants(node: Node) -> List[int]:
    """Digit values in left-to-right order"""
    return [n.value for n in get_all_nodes(node, 'depth_first') if isinstance(n, ConstantNode)]


def get_binary_ops(node: Node) -> List[BinaryOpNode]:
    return find_nodes_by_type(node, BinaryOpNode)


def clone_tree(node: Node) -> Node:
    """Deep copy of a tree; the clone shares no nodes with the original"""
    return node.copy()
