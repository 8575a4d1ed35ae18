"""
Symbolic differentiation of single-variable expression trees.

The engine rewrites every node into its derivative bottom-up using three
read-only rule tables built once at import time:

* node kind (constant, variable, binary operator, call) -> rule
* binary operator ('+', '*', '/') -> sum, product and quotient rules
* function name -> chain rule, with shape-dependent cases for ``pow`` and ``log``

No simplification is performed: the result is a new tree that may share
unchanged sub-trees of the input but never mutates it.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .exceptions import DifferentiationError, TooDeepError, UnsupportedConstructError
from .expression_tree.core.node import Node, ConstantNode, VariableNode, BinaryOpNode, CallNode
from .expression_tree.core.operators import NodeType
from .expression_tree.expression import Expression
from .expression_tree.utils.tree_utils import calculate_tree_depth
from .expression_tree.utils.validator import ExpressionValidator
from .logging_system import LogLevel, is_enabled, log_debug, log_info, log_warning, log_derivative_summary

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class _Scope:
  """Recursion context of one differentiation call"""
  variable: str
  depth: int
  max_depth: int

  def __call__(self, node: Node) -> Node:
    return _differentiate(node, _Scope(self.variable, self.depth + 1, self.max_depth))


Rule = Callable[[Node, _Scope], Node]


# Tree construction helpers

def _const(value: float) -> ConstantNode:
  return ConstantNode(value)


def _add(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode('+', left, right)


def _mul(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode('*', left, right)


def _div(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode('/', left, right)


def _call(name: str, *args: Node) -> CallNode:
  return CallNode(name, args)


def _square(u: Node) -> CallNode:
  return _call('pow', u, _const(2.0))


# Node-kind rules

def _diff_constant(node: ConstantNode, d: _Scope) -> Node:
  return _const(0.0)


def _diff_variable(node: VariableNode, d: _Scope) -> Node:
  if node.name != d.variable:
    raise UnsupportedConstructError(
      f"Free variable '{node.name}' is not the bound variable '{d.variable}'", node)
  return _const(1.0)


def _diff_binary_op(node: BinaryOpNode, d: _Scope) -> Node:
  rule = BINARY_RULES.get(node.operator)
  if rule is None:
    raise UnsupportedConstructError(f"No derivative rule for operator '{node.operator}'", node)
  return rule(node, d)


def _diff_call(node: CallNode, d: _Scope) -> Node:
  ExpressionValidator.check_call(node)
  return FUNCTION_RULES[node.name](node, d)


# Binary operator rules

def _diff_add(node: BinaryOpNode, d: _Scope) -> Node:
  return _add(d(node.left), d(node.right))


def _diff_mul(node: BinaryOpNode, d: _Scope) -> Node:
  a, b = node.left, node.right
  return _add(_mul(a, d(b)), _mul(b, d(a)))


def _diff_div(node: BinaryOpNode, d: _Scope) -> Node:
  # (b*a' + (a*-1)*b') / (b*b), without a subtraction node
  a, b = node.left, node.right
  numerator = _add(_mul(b, d(a)), _mul(_mul(a, _const(-1.0)), d(b)))
  return _div(numerator, _mul(b, b))


# Function rules

def _chain(outer: Callable[[Node], Node]) -> Rule:
  """Chain rule for a unary function given the derivative of its outer factor"""
  def rule(node: CallNode, d: _Scope) -> Node:
    u = node.args[0]
    return _mul(outer(u), d(u))
  return rule


def _inverse_sqrt_one_minus_square(u: Node) -> Node:
  return _call('pow', _add(_const(1.0), _mul(_const(-1.0), _square(u))), _const(-0.5))


def _diff_log(node: CallNode, d: _Scope) -> Node:
  u = node.args[0]
  if len(node.args) == 1:
    return _mul(_div(_const(1.0), u), d(u))

  base = node.args[1]
  if isinstance(base, ConstantNode):
    return _mul(_div(_const(1.0), _mul(u, _call('log', base))), d(u))
  # Variable base: log_b(u) = ln(u) / ln(b)
  return d(_div(_call('log', u), _call('log', base)))


def _diff_pow(node: CallNode, d: _Scope) -> Node:
  base, exponent = node.args

  if isinstance(base, ConstantNode):
    # c^v -> v' * (c^v * ln c)
    return _mul(d(exponent), _mul(node, _call('log', base)))

  if isinstance(exponent, ConstantNode):
    # u^n -> n * u^(n-1) * u'
    n = exponent.value
    return _mul(_mul(_const(n), _call('pow', base, _const(n - 1.0))), d(base))

  # u^v -> exp(v * ln u), differentiated as a whole
  return d(_call('exp', _mul(exponent, _call('log', base))))


NODE_RULES: Mapping[NodeType, Rule] = MappingProxyType({
  NodeType.CONSTANT: _diff_constant,
  NodeType.VARIABLE: _diff_variable,
  NodeType.BINARY_OP: _diff_binary_op,
  NodeType.CALL: _diff_call,
})

BINARY_RULES: Mapping[str, Rule] = MappingProxyType({
  '+': _diff_add,
  '*': _diff_mul,
  '/': _diff_div,
})

FUNCTION_RULES: Mapping[str, Rule] = MappingProxyType({
  'sin': _chain(lambda u: _call('cos', u)),
  'cos': _chain(lambda u: _mul(_const(-1.0), _call('sin', u))),
  'tan': _chain(lambda u: _div(_const(1.0), _square(_call('cos', u)))),
  'asin': _chain(_inverse_sqrt_one_minus_square),
  'acos': _chain(lambda u: _mul(_const(-1.0), _inverse_sqrt_one_minus_square(u))),
  'atan': _chain(lambda u: _div(_const(1.0), _add(_const(1.0), _square(u)))),
  'sinh': _chain(lambda u: _call('cosh', u)),
  'cosh': _chain(lambda u: _call('sinh', u)),
  'tanh': _chain(lambda u: _div(_const(1.0), _square(_call('cosh', u)))),
  'exp': _chain(lambda u: _call('exp', u)),
  'log': _diff_log,
  'pow': _diff_pow,
})


def _differentiate(node: Node, d: _Scope) -> Node:
  if d.depth > d.max_depth:
    raise TooDeepError(f"Differentiation exceeded the depth limit of {d.max_depth}", node, d.max_depth)

  rule = NODE_RULES.get(getattr(node, 'node_type', None))
  if rule is None:
    raise UnsupportedConstructError(f"Unsupported node kind {type(node).__name__}", node)
  return rule(node, d)


class Differentiator:
  """Symbolic differentiation engine with a configurable depth limit"""

  def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
      raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}")
    self.max_depth = max_depth
    if max_depth != DEFAULT_MAX_DEPTH:
      log_info(f"Differentiation depth limit set to {max_depth}", LogLevel.DETAILED)

  def differentiate(self, node: Node, variable: str = 'x') -> Node:
    """Derivative of a bare node tree with respect to ``variable``"""
    if not isinstance(node, Node):
      raise UnsupportedConstructError(f"Unsupported node kind {type(node).__name__}", node)
    depth = calculate_tree_depth(node)
    if depth > self.max_depth:
      raise TooDeepError(
        f"Expression depth {depth} exceeds the depth limit of {self.max_depth}", node, self.max_depth)
    try:
      return _differentiate(node, _Scope(variable, 1, self.max_depth))
    except RecursionError as e:
      # max_depth above what the interpreter stack can hold
      raise TooDeepError(
        f"Interpreter recursion limit reached before the depth limit of {self.max_depth}",
        node, self.max_depth) from e

  def derivative(self, function: Expression) -> Expression:
    """Derivative of a single-variable function, bound to the same variable"""
    try:
      body = self.differentiate(function.root, function.variable)
    except DifferentiationError as e:
      log_warning(f"Differentiation with respect to '{function.variable}' failed: {e}")
      raise

    if is_enabled(LogLevel.VERBOSE):
      log_debug(f"Differentiated {function.to_string()} with respect to '{function.variable}'")
    result = Expression(body, function.variable)
    log_derivative_summary(function.variable, function.size(), result.size())
    return result


_default_differentiator = Differentiator()


def derivative(function: Expression, max_depth: Optional[int] = None) -> Expression:
  """Symbolic derivative of ``function``; ``max_depth`` overrides the default depth limit"""
  if max_depth is None:
    return _default_differentiator.derivative(function)
  return Differentiator(max_depth).derivative(function)
