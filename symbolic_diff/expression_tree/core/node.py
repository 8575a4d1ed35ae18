import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union
from .operators import (
  NodeType, BINARY_OP_MAP, FUNCTION_OP_MAP,
  evaluate_variable, evaluate_constant, evaluate_binary_op,
  evaluate_unary_function, evaluate_binary_function
)
from ...exceptions import UnsupportedConstructError

Operand = Union['Node', int, float]


def ensure_node(value: Operand) -> 'Node':
  """Lift plain numbers to constant nodes"""
  if isinstance(value, Node):
    return value
  if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
    raise TypeError(f"Cannot build an expression node from {type(value).__name__}")
  return ConstantNode(float(value))


class Node(ABC):
  """Immutable expression tree node with cached hash and size"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  def __setattr__(self, name, value):
    # Fields are write-once; only the caches may be refreshed
    if name not in Node.__slots__ and hasattr(self, name):
      raise AttributeError(f"{type(self).__name__} nodes are immutable")
    object.__setattr__(self, name, value)

  @property
  @abstractmethod
  def node_type(self) -> NodeType:
    pass

  @abstractmethod
  def evaluate(self, X: np.ndarray) -> np.ndarray:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def to_sympy(self, symbol: sp.Symbol) -> sp.Expr:
    pass

  def children(self) -> Tuple['Node', ...]:
    return ()

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  @abstractmethod
  def _key(self) -> tuple:
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = hash((self.node_type, self._key()))
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    if self is other:
      return True
    return type(self) is type(other) and hash(self) == hash(other) and self._key() == other._key()

  def __ne__(self, other) -> bool:
    result = self.__eq__(other)
    return result if result is NotImplemented else not result

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}<{self.to_string()}>"

  # Tree building through operators

  def __add__(self, other: Operand) -> 'Node':
    return BinaryOpNode('+', self, ensure_node(other))

  def __radd__(self, other: Operand) -> 'Node':
    return BinaryOpNode('+', ensure_node(other), self)

  def __mul__(self, other: Operand) -> 'Node':
    return BinaryOpNode('*', self, ensure_node(other))

  def __rmul__(self, other: Operand) -> 'Node':
    return BinaryOpNode('*', ensure_node(other), self)

  def __truediv__(self, other: Operand) -> 'Node':
    return BinaryOpNode('/', self, ensure_node(other))

  def __rtruediv__(self, other: Operand) -> 'Node':
    return BinaryOpNode('/', ensure_node(other), self)

  def __sub__(self, other: Operand) -> 'Node':
    return BinaryOpNode('+', self, BinaryOpNode('*', ensure_node(other), ConstantNode(-1.0)))

  def __rsub__(self, other: Operand) -> 'Node':
    return BinaryOpNode('+', ensure_node(other), BinaryOpNode('*', self, ConstantNode(-1.0)))

  def __neg__(self) -> 'Node':
    return BinaryOpNode('*', self, ConstantNode(-1.0))

  def __pow__(self, other: Operand) -> 'Node':
    return CallNode('pow', (self, ensure_node(other)))

  def __rpow__(self, other: Operand) -> 'Node':
    return CallNode('pow', (ensure_node(other), self))


class VariableNode(Node):
  __slots__ = ('name',)

  def __init__(self, name: str = 'x'):
    super().__init__()
    self.name = name

  @property
  def node_type(self) -> NodeType:
    return NodeType.VARIABLE

  def evaluate(self, X: np.ndarray) -> np.ndarray:
    return evaluate_variable(X)

  def to_string(self) -> str:
    return self.name

  def to_sympy(self, symbol):
    return symbol

  def _key(self) -> tuple:
    return (self.name,)


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  @property
  def node_type(self) -> NodeType:
    return NodeType.CONSTANT

  def evaluate(self, X: np.ndarray) -> np.ndarray:
    return evaluate_constant(X.shape[0], self.value)

  def to_string(self) -> str:
    return f"{self.value:g}"

  def to_sympy(self, symbol):
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def _key(self) -> tuple:
    return (self.value,)


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    self.operator = operator
    self.left = ensure_node(left)
    self.right = ensure_node(right)

  @property
  def node_type(self) -> NodeType:
    return NodeType.BINARY_OP

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def evaluate(self, X: np.ndarray) -> np.ndarray:
    op_code = BINARY_OP_MAP.get(self.operator)
    if op_code is None:
      raise UnsupportedConstructError(f"Unknown binary operator '{self.operator}'", self)
    left_val = self.left.evaluate(X)
    right_val = self.right.evaluate(X)
    return evaluate_binary_op(left_val, right_val, int(op_code))

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def to_sympy(self, symbol):
    if self.operator == '+':
      return sp.Add(self.left.to_sympy(symbol), self.right.to_sympy(symbol), evaluate=False)
    elif self.operator == '*':
      return sp.Mul(self.left.to_sympy(symbol), self.right.to_sympy(symbol), evaluate=False)
    elif self.operator == '/':
      return sp.Mul(self.left.to_sympy(symbol), sp.Pow(self.right.to_sympy(symbol), -1), evaluate=False)
    else:
      raise UnsupportedConstructError(f"to_sympy reached unexpected operator '{self.operator}'", self)

  def _key(self) -> tuple:
    return (self.operator, self.left, self.right)


class CallNode(Node):
  __slots__ = ('name', 'args')

  def __init__(self, name: str, args: Tuple[Node, ...]):
    super().__init__()
    self.name = name
    self.args = tuple(ensure_node(arg) for arg in args)

  @property
  def node_type(self) -> NodeType:
    return NodeType.CALL

  @property
  def arity(self) -> int:
    return len(self.args)

  def children(self) -> Tuple[Node, ...]:
    return self.args

  def evaluate(self, X: np.ndarray) -> np.ndarray:
    from ..utils.validator import ExpressionValidator
    ExpressionValidator.check_call(self)

    op_code = int(FUNCTION_OP_MAP[self.name])
    values = [arg.evaluate(X) for arg in self.args]
    if len(values) == 1:
      return evaluate_unary_function(values[0], op_code)
    return evaluate_binary_function(values[0], values[1], op_code)

  def to_string(self) -> str:
    return f"{self.name}({', '.join(arg.to_string() for arg in self.args)})"

  def to_sympy(self, symbol):
    from ..utils.validator import ExpressionValidator
    ExpressionValidator.check_call(self)

    operands = [arg.to_sympy(symbol) for arg in self.args]
    if self.name == 'sin':
      return sp.sin(*operands)
    elif self.name == 'cos':
      return sp.cos(*operands)
    elif self.name == 'tan':
      return sp.tan(*operands)
    elif self.name == 'asin':
      return sp.asin(*operands)
    elif self.name == 'acos':
      return sp.acos(*operands)
    elif self.name == 'atan':
      return sp.atan(*operands)
    elif self.name == 'sinh':
      return sp.sinh(*operands)
    elif self.name == 'cosh':
      return sp.cosh(*operands)
    elif self.name == 'tanh':
      return sp.tanh(*operands)
    elif self.name == 'exp':
      return sp.exp(*operands)
    elif self.name == 'log':
      return sp.log(*operands)
    else:
      return sp.Pow(*operands, evaluate=False)

  def _key(self) -> tuple:
    return (self.name, self.args)
