"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, BinaryOpNode, CallNode, ensure_node
from .operators import (
    NodeType, OpType, BINARY_OP_MAP, FUNCTION_OP_MAP, FUNCTION_ARITY,
    evaluate_variable, evaluate_constant, evaluate_binary_op,
    evaluate_unary_function, evaluate_binary_function
)
from . import functions

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'CallNode', 'ensure_node',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'FUNCTION_OP_MAP', 'FUNCTION_ARITY',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op',
    'evaluate_unary_function', 'evaluate_binary_function',
    'functions'
]
