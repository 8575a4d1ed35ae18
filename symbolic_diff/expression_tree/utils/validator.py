import numpy as np
from typing import Optional
from ..core.node import Node, ConstantNode, BinaryOpNode, CallNode, VariableNode
from ..core.operators import BINARY_OP_MAP, FUNCTION_OP_MAP, FUNCTION_ARITY
from .tree_utils import get_all_nodes
from ...exceptions import (
  DifferentiationError, UnsupportedConstructError, MalformedCallError
)


class ExpressionValidator:

  @staticmethod
  def check_call(node: CallNode):
    """Raise if the call's name is outside the catalogue or its arity is wrong"""
    if node.name not in FUNCTION_OP_MAP:
      raise UnsupportedConstructError(f"Unsupported function '{node.name}' in {node.to_string()}", node)
    accepted = FUNCTION_ARITY[node.name]
    if len(node.args) not in accepted:
      expected = ' or '.join(str(n) for n in accepted)
      raise MalformedCallError(
        f"'{node.name}' takes {expected} argument(s), got {len(node.args)}", node)

  @staticmethod
  def check_binary_op(node: BinaryOpNode):
    if node.operator not in BINARY_OP_MAP:
      raise UnsupportedConstructError(f"Unsupported binary operator '{node.operator}'", node)

  @staticmethod
  def validate(node: Node, variable: Optional[str] = None):
    """Walk the whole tree and raise the first construct the engine cannot handle"""
    for current in get_all_nodes(node):
      if isinstance(current, CallNode):
        ExpressionValidator.check_call(current)
      elif isinstance(current, BinaryOpNode):
        ExpressionValidator.check_binary_op(current)
      elif isinstance(current, VariableNode):
        if variable is not None and current.name != variable:
          raise UnsupportedConstructError(
            f"Free variable '{current.name}' is not the bound variable '{variable}'", current)
      elif not isinstance(current, ConstantNode):
        raise UnsupportedConstructError(f"Unsupported node kind {type(current).__name__}", current)

  @staticmethod
  def is_valid_expression(node: Node, X: Optional[np.ndarray] = None,
                          variable: Optional[str] = None) -> bool:
    try:
      ExpressionValidator.validate(node, variable)
    except DifferentiationError:
      return False

    if X is not None:
      return ExpressionValidator._test_evaluation(node, X)

    return True

  @staticmethod
  def _test_evaluation(node: Node, X: np.ndarray, sample_size: int = 10) -> bool:
    X = np.ascontiguousarray(X, dtype=np.float64).ravel()
    if X.size == 0:
      return True

    sample_indices = np.random.choice(len(X), min(sample_size, len(X)), replace=False)
    X_sample = np.ascontiguousarray(X[sample_indices])

    result = node.evaluate(X_sample)

    if not isinstance(result, np.ndarray):
      return False

    return bool(np.all(np.isfinite(result)))
