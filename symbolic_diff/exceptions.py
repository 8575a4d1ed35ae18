"""Errors raised while differentiating or evaluating expression trees."""

from typing import Optional


class DifferentiationError(ValueError):
  """Base class for failures of the differentiation engine"""

  def __init__(self, message: str, node: Optional[object] = None):
    super().__init__(message)
    self.node = node


class UnsupportedConstructError(DifferentiationError):
  """A node kind, operator or function name has no rule"""


class MalformedCallError(DifferentiationError):
  """A call node carries the wrong number of arguments for its function name"""


class TooDeepError(DifferentiationError):
  """The expression tree is deeper than the configured limit"""

  def __init__(self, message: str, node: Optional[object] = None, limit: int = 0):
    super().__init__(message, node)
    self.limit = limit
