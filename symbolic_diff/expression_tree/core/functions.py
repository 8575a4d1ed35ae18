"""Named function builders for expression trees.

Each builder accepts nodes or plain numbers and returns a ``CallNode`` whose
name is one of the supported catalogue entries, so formulas read the same way
they would with the ``math`` module::

    z = VariableNode('z')
    f = exp(sin(z)) + pow(z, 2)
"""

from typing import Optional

from .node import CallNode, Operand, ensure_node


def _call(name: str, *args: Operand) -> CallNode:
  return CallNode(name, tuple(ensure_node(arg) for arg in args))


def sin(u: Operand) -> CallNode:
  return _call('sin', u)


def cos(u: Operand) -> CallNode:
  return _call('cos', u)


def tan(u: Operand) -> CallNode:
  return _call('tan', u)


def asin(u: Operand) -> CallNode:
  return _call('asin', u)


def acos(u: Operand) -> CallNode:
  return _call('acos', u)


def atan(u: Operand) -> CallNode:
  return _call('atan', u)


def sinh(u: Operand) -> CallNode:
  return _call('sinh', u)


def cosh(u: Operand) -> CallNode:
  return _call('cosh', u)


def tanh(u: Operand) -> CallNode:
  return _call('tanh', u)


def exp(u: Operand) -> CallNode:
  return _call('exp', u)


def log(u: Operand, base: Optional[Operand] = None) -> CallNode:
  """Natural logarithm, or the base-``base`` logarithm when a base is given."""
  if base is None:
    return _call('log', u)
  return _call('log', u, base)


def pow(base: Operand, exponent: Operand) -> CallNode:
  return _call('pow', base, exponent)


__all__ = [
  'sin', 'cos', 'tan', 'asin', 'acos', 'atan',
  'sinh', 'cosh', 'tanh', 'exp', 'log', 'pow'
]
