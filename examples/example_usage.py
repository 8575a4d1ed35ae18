import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from symbolic_diff import Expression, LogLevel, configure_logging, derivative, functions as fn

def build_examples():
  """A few functions built from lambdas and from strings"""
  return [
    Expression.from_function(lambda x: fn.sin(x * x + x), 'x'),
    Expression.from_function(lambda x: fn.pow(x, x), 'x'),
    Expression.from_function(lambda x: fn.log(x + 3, x + 1), 'x'),
    Expression.from_string("exp(-x^2) / (1 + x^2)"),
  ]

def check_against_finite_difference(f, df, X, eps=1e-7):
  """Largest gap between the symbolic derivative and a central difference"""
  with np.errstate(all='ignore'):
    numeric = (f.evaluate(X + eps) - f.evaluate(X - eps)) / (2 * eps)
  return float(np.nanmax(np.abs(df.evaluate(X) - numeric)))

def main():
  configure_logging(LogLevel.DETAILED)
  X = np.linspace(0.5, 3.0, 26)

  for f in build_examples():
    df = derivative(f)
    print(f"f(x)   = {f}")
    print(f"f'(x)  = {df}")
    print(f"sympy  = {df.to_sympy()}")
    print(f"max |symbolic - numeric| = {check_against_finite_difference(f, df, X):.2e}")

    d2f = derivative(df)
    print(f"f''(x) has {d2f.size()} nodes, f''(1) = {d2f(1.0):.6f}")
    print()

if __name__ == "__main__":
  main()
