"""Expression Tree Module

Immutable expression trees for single-variable functions: nodes, named function
builders, numeric evaluation and sympy interop.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    CallNode,
    ensure_node
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    FUNCTION_OP_MAP,
    FUNCTION_ARITY
)
from .core import functions
from .utils import ExpressionValidator, node_to_sympy, sympy_to_node

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "CallNode", "ensure_node",
    "NodeType", "OpType",
    "BINARY_OP_MAP", "FUNCTION_OP_MAP", "FUNCTION_ARITY",
    "functions",
    "ExpressionValidator", "node_to_sympy", "sympy_to_node"
]
