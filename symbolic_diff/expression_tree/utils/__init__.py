"""Utilities for expression trees."""

from .sympy_utils import node_to_sympy, sympy_to_node, SYMPY_FUNCTION_NAMES
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    find_calls_by_name, get_constants, get_variables
)
from .validator import ExpressionValidator

__all__ = [
    'node_to_sympy', 'sympy_to_node', 'SYMPY_FUNCTION_NAMES',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'find_calls_by_name', 'get_constants', 'get_variables',
    'ExpressionValidator'
]
