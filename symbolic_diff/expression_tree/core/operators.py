import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  BINARY_OP = 2
  CALL = 3

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  MUL = 1
  DIV = 2
  # Named functions
  SIN = 3
  COS = 4
  TAN = 5
  ASIN = 6
  ACOS = 7
  ATAN = 8
  SINH = 9
  COSH = 10
  TANH = 11
  EXP = 12
  LOG = 13
  POW = 14

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '*': OpType.MUL, '/': OpType.DIV}
FUNCTION_OP_MAP = {
    'sin': OpType.SIN, 'cos': OpType.COS, 'tan': OpType.TAN,
    'asin': OpType.ASIN, 'acos': OpType.ACOS, 'atan': OpType.ATAN,
    'sinh': OpType.SINH, 'cosh': OpType.COSH, 'tanh': OpType.TANH,
    'exp': OpType.EXP, 'log': OpType.LOG, 'pow': OpType.POW
}

# Accepted argument counts per function name
FUNCTION_ARITY = {
    'sin': (1,), 'cos': (1,), 'tan': (1,),
    'asin': (1,), 'acos': (1,), 'atan': (1,),
    'sinh': (1,), 'cosh': (1,), 'tanh': (1,),
    'exp': (1,), 'log': (1, 2), 'pow': (2,)
}

# Plain int codes so the kernels compare compile-time constants
_ADD, _MUL, _DIV = int(OpType.ADD), int(OpType.MUL), int(OpType.DIV)
_SIN, _COS, _TAN = int(OpType.SIN), int(OpType.COS), int(OpType.TAN)
_ASIN, _ACOS, _ATAN = int(OpType.ASIN), int(OpType.ACOS), int(OpType.ATAN)
_SINH, _COSH, _TANH = int(OpType.SINH), int(OpType.COSH), int(OpType.TANH)
_EXP, _LOG, _POW = int(OpType.EXP), int(OpType.LOG), int(OpType.POW)

# error_model='numpy' keeps IEEE results (inf/nan) instead of raising on division by zero

@numba.njit(cache=True, error_model='numpy')
def evaluate_variable(X):
  return X.astype(np.float64)

@numba.njit(cache=True, error_model='numpy')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, op_code):
  if op_code == _ADD:
    return left_val + right_val
  elif op_code == _MUL:
    return left_val * right_val
  elif op_code == _DIV:
    return left_val / right_val
  return np.full(left_val.shape[0], np.nan)

@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_function(operand_val, op_code):
  if op_code == _SIN:
    return np.sin(operand_val)
  elif op_code == _COS:
    return np.cos(operand_val)
  elif op_code == _TAN:
    return np.tan(operand_val)
  elif op_code == _ASIN:
    return np.arcsin(operand_val)
  elif op_code == _ACOS:
    return np.arccos(operand_val)
  elif op_code == _ATAN:
    return np.arctan(operand_val)
  elif op_code == _SINH:
    return np.sinh(operand_val)
  elif op_code == _COSH:
    return np.cosh(operand_val)
  elif op_code == _TANH:
    return np.tanh(operand_val)
  elif op_code == _EXP:
    return np.exp(operand_val)
  elif op_code == _LOG:
    return np.log(operand_val)
  return np.full(operand_val.shape[0], np.nan)

@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_function(first_val, second_val, op_code):
  if op_code == _POW:
    return np.power(first_val, second_val)
  elif op_code == _LOG:
    # log(u, b) is the base-b logarithm of u
    return np.log(first_val) / np.log(second_val)
  return np.full(first_val.shape[0], np.nan)
