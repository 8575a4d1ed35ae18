# Python

"""Symbolic Differentiation Package

Symbolic derivatives of single-variable real functions held as immutable
expression trees.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, CallNode, ExpressionValidator, functions
)
from .differentiator import Differentiator, derivative, DEFAULT_MAX_DEPTH
from .exceptions import (
  DifferentiationError, UnsupportedConstructError, MalformedCallError, TooDeepError
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "CallNode", "ExpressionValidator", "functions",
  "Differentiator", "derivative", "DEFAULT_MAX_DEPTH",
  "DifferentiationError", "UnsupportedConstructError", "MalformedCallError", "TooDeepError",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
