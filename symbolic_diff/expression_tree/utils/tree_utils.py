"""
Tree Utility Functions

Traversal and query helpers for expression trees. Traversals that may see
arbitrarily deep input are iterative so that they never exhaust the call stack.
"""

from collections import deque
from typing import List, Type, TypeVar

from ..core.node import Node, CallNode, ConstantNode, VariableNode

T = TypeVar('T', bound=Node)


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative)"""
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Pre-order depth-first traversal (iterative)"""
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        # Reversed so children come out left to right
        stack.extend(reversed(current_node.children()))

    return all_nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    stack = [(node, 1)]

    while stack:
        current_node, depth = stack.pop()
        if depth > max_depth:
            max_depth = depth
        for child in current_node.children():
            stack.append((child, depth + 1))

    return max_depth


def find_nodes_by_type(node: Node, node_type: Type[T]) -> List[T]:
    """Find all nodes of a specific class"""
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def find_calls_by_name(node: Node, name: str) -> List[CallNode]:
    """Find all call nodes invoking the named function"""
    return [n for n in find_nodes_by_type(node, CallNode) if n.name == name]


def get_constants(node: Node) -> List[ConstantNode]:
    return find_nodes_by_type(node, ConstantNode)


def get_variables(node: Node) -> List[VariableNode]:
    return find_nodes_by_type(node, VariableNode)
