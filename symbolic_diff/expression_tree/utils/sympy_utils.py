import sympy as sp
from ..core.node import Node, VariableNode, ConstantNode, BinaryOpNode, CallNode

# sympy function classes that map one-to-one onto catalogue names
SYMPY_FUNCTION_NAMES = {
  sp.sin: 'sin', sp.cos: 'cos', sp.tan: 'tan',
  sp.asin: 'asin', sp.acos: 'acos', sp.atan: 'atan',
  sp.sinh: 'sinh', sp.cosh: 'cosh', sp.tanh: 'tanh',
  sp.exp: 'exp', sp.log: 'log'
}


def node_to_sympy(node: Node, variable: str = 'x') -> sp.Expr:
  """Convert a node tree to a sympy expression in the symbol named ``variable``"""
  return node.to_sympy(sp.Symbol(variable))


def sympy_to_node(sympy_expr: sp.Expr, variable: str = 'x') -> Node:
  """Convert a sympy expression to our internal node structure"""
  if sympy_expr.is_Symbol:
    if sympy_expr.name != variable:
      raise ValueError(f"Free symbol '{sympy_expr.name}' is not the variable '{variable}'")
    return VariableNode(variable)

  if sympy_expr.is_number:
    if not sympy_expr.is_real:
      raise ValueError(f"Constant {sympy_expr} has no real value")
    return ConstantNode(float(sympy_expr))

  if sympy_expr.func in SYMPY_FUNCTION_NAMES:
    name = SYMPY_FUNCTION_NAMES[sympy_expr.func]
    args = tuple(sympy_to_node(arg, variable) for arg in sympy_expr.args)
    return CallNode(name, args)

  if isinstance(sympy_expr, sp.Pow):
    base, exponent = sympy_expr.args
    if exponent == -1:
      return BinaryOpNode('/', ConstantNode(1.0), sympy_to_node(base, variable))
    return CallNode('pow', (sympy_to_node(base, variable), sympy_to_node(exponent, variable)))

  if isinstance(sympy_expr, sp.Add):
    # Multiple terms - build left-associative tree
    terms = sympy_expr.as_ordered_terms()
    result = sympy_to_node(terms[0], variable)
    for term in terms[1:]:
      result = BinaryOpNode('+', result, sympy_to_node(term, variable))
    return result

  if isinstance(sympy_expr, sp.Mul):
    numerator = []
    denominator = []
    for factor in sympy_expr.as_ordered_factors():
      if isinstance(factor, sp.Pow) and factor.args[1] == -1:
        denominator.append(factor.args[0])
      else:
        numerator.append(factor)

    result = _product(numerator, variable) if numerator else ConstantNode(1.0)
    if denominator:
      result = BinaryOpNode('/', result, _product(denominator, variable))
    return result

  raise ValueError(f"Cannot convert sympy expression '{sympy_expr}' ({type(sympy_expr).__name__})")


def _product(factors, variable: str) -> Node:
  result = sympy_to_node(factors[0], variable)
  for factor in factors[1:]:
    result = BinaryOpNode('*', result, sympy_to_node(factor, variable))
  return result
