import numpy as np
import sympy as sp
from typing import Callable, Optional, Union
from .core.node import Node, VariableNode, ensure_node
from .utils.sympy_utils import sympy_to_node
from .utils.tree_utils import calculate_tree_depth


class Expression:
  """Single-variable function: an expression tree paired with its bound variable"""

  __slots__ = ('root', 'variable', '_string_cache')

  def __init__(self, root: Node, variable: str = 'x'):
    self.root = ensure_node(root)
    self.variable = variable
    self._string_cache: Optional[str] = None

  def evaluate(self, X) -> np.ndarray:
    X = np.ascontiguousarray(np.atleast_1d(np.asarray(X, dtype=np.float64)).ravel())
    return self.root.evaluate(X)

  def __call__(self, x) -> Union[float, np.ndarray]:
    if np.ndim(x) == 0:
      return float(self.evaluate(x)[0])
    return self.evaluate(x)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def symbol(self) -> sp.Symbol:
    return sp.Symbol(self.variable)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy(self.symbol())

  # Function: lambda x -> y, built by sympy for the numpy backend
  def lambdify(self) -> Callable:
    return sp.lambdify(self.symbol(), self.to_sympy(), modules='numpy')

  def derivative(self, max_depth: Optional[int] = None) -> 'Expression':
    from ..differentiator import derivative
    return derivative(self, max_depth=max_depth)

  def __hash__(self) -> int:
    return hash((self.variable, self.root))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.variable == other.variable and self.root == other.root

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.variable} -> {self.to_string()})"

  @classmethod
  def from_function(cls, fn: Callable[[VariableNode], Union[Node, float]],
                    variable: str = 'x') -> 'Expression':
    """Build the tree by calling ``fn`` with the variable node, e.g. ``lambda z: sin(z * z)``"""
    return cls(ensure_node(fn(VariableNode(variable))), variable)

  @classmethod
  def from_sympy(cls, sympy_expr: sp.Expr, variable: str = 'x') -> 'Expression':
    return cls(sympy_to_node(sympy_expr, variable), variable)

  @classmethod
  def from_string(cls, expr_str: str, variable: str = 'x') -> 'Expression':
    symbol = sp.Symbol(variable)
    try:
      sympy_expr = sp.sympify(expr_str.replace('^', '**'), locals={variable: symbol})
    except (sp.SympifyError, SyntaxError, TypeError) as e:
      raise ValueError(f"Cannot parse expression '{expr_str}': {e}") from e

    extra = sympy_expr.free_symbols - {symbol}
    if extra:
      names = ', '.join(sorted(str(s) for s in extra))
      raise ValueError(f"Expression '{expr_str}' has free symbols other than '{variable}': {names}")

    return cls.from_sympy(sympy_expr, variable)
