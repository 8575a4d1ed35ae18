"""Node construction, evaluation, rendering and the Expression wrapper."""

import math

import numpy as np
import pytest
import sympy as sp

from symbolic_diff import (
    BinaryOpNode, CallNode, ConstantNode, Expression, MalformedCallError,
    UnsupportedConstructError, VariableNode, functions as fn
)
from symbolic_diff.expression_tree import NodeType, OpType, ensure_node
from symbolic_diff.expression_tree.core import (
    evaluate_binary_function, evaluate_binary_op, evaluate_unary_function
)


# Nodes

def test_operator_overloads_build_supported_nodes(z):
    assert z + 1 == BinaryOpNode('+', z, ConstantNode(1))
    assert 2 * z == BinaryOpNode('*', ConstantNode(2), z)
    assert 1 / z == BinaryOpNode('/', ConstantNode(1), z)
    assert z - 3 == BinaryOpNode('+', z, BinaryOpNode('*', ConstantNode(3), ConstantNode(-1)))
    assert 3 - z == BinaryOpNode('+', ConstantNode(3), BinaryOpNode('*', z, ConstantNode(-1)))
    assert -z == BinaryOpNode('*', z, ConstantNode(-1))
    assert z ** 2 == CallNode('pow', (z, ConstantNode(2)))
    assert 2 ** z == CallNode('pow', (ConstantNode(2), z))


def test_ensure_node_rejects_non_numbers(z):
    assert ensure_node(z) is z
    assert ensure_node(np.float32(0.5)) == ConstantNode(0.5)
    for bad in (True, "z", None, [1.0]):
        with pytest.raises(TypeError):
            ensure_node(bad)
    with pytest.raises(TypeError):
        z + "1"


def test_nodes_are_immutable(z):
    node = fn.sin(z) + 1
    with pytest.raises(AttributeError):
        node.left = z
    with pytest.raises(AttributeError):
        ConstantNode(2).value = 3.0
    with pytest.raises(AttributeError):
        z.name = 'y'


def test_node_types(z):
    assert z.node_type == NodeType.VARIABLE
    assert ConstantNode(1).node_type == NodeType.CONSTANT
    assert (z + z).node_type == NodeType.BINARY_OP
    assert fn.exp(z).node_type == NodeType.CALL


def test_structural_equality_and_hash(z):
    a = fn.sin(z * 2) + fn.log(z, 10)
    b = fn.sin(VariableNode('z') * 2) + fn.log(VariableNode('z'), 10)
    assert a == b
    assert hash(a) == hash(b)
    assert a != fn.sin(z * 3) + fn.log(z, 10)
    assert z != VariableNode('y')
    assert ConstantNode(2) == ConstantNode(2.0)
    assert len({a, b, z}) == 2


def test_size_counts_every_node(z):
    assert z.size() == 1
    assert (z + 1).size() == 3
    assert fn.pow(fn.sin(z), 2).size() == 4
    assert fn.log(z * z, 2).size() == 5


def test_to_string(z):
    assert ConstantNode(2).to_string() == "2"
    assert ConstantNode(0.5).to_string() == "0.5"
    assert (z * 5 + 1).to_string() == "((z * 5) + 1)"
    assert fn.log(z, 6).to_string() == "log(z, 6)"
    assert str(fn.exp(z / 2)) == "exp((z / 2))"
    assert repr(z + 1) == "BinaryOpNode<(z + 1)>"


@pytest.mark.parametrize("build, reference", [
    (lambda z: fn.sin(z), np.sin),
    (lambda z: fn.cos(z), np.cos),
    (lambda z: fn.tan(z), np.tan),
    (lambda z: fn.asin(z / 4), lambda x: np.arcsin(x / 4)),
    (lambda z: fn.acos(z / 4), lambda x: np.arccos(x / 4)),
    (lambda z: fn.atan(z), np.arctan),
    (lambda z: fn.sinh(z), np.sinh),
    (lambda z: fn.cosh(z), np.cosh),
    (lambda z: fn.tanh(z), np.tanh),
    (lambda z: fn.exp(z), np.exp),
    (lambda z: fn.log(z), np.log),
    (lambda z: fn.log(z, 2), np.log2),
    (lambda z: fn.pow(z, 3), lambda x: x ** 3),
    (lambda z: fn.pow(2, z), lambda x: 2.0 ** x),
    (lambda z: (z * z + 1) / (z + 5), lambda x: (x * x + 1) / (x + 5)),
])
def test_evaluate_matches_numpy(build, reference):
    x = np.linspace(0.1, 3.0, 30)
    f = Expression.from_function(build, 'z')
    np.testing.assert_allclose(f.evaluate(x), reference(x), rtol=1e-12, atol=1e-14)


def test_evaluate_follows_ieee_semantics(z):
    f = Expression(1 / z + fn.log(z), 'z')
    with np.errstate(all='ignore'):
        values = f.evaluate([0.0, -1.0])
    assert np.isnan(values[0]) or np.isinf(values[0])
    assert np.isnan(values[1])


def test_evaluate_rejects_malformed_nodes(z):
    x = np.array([1.0, 2.0])
    with pytest.raises(UnsupportedConstructError):
        CallNode('sec', (z,)).evaluate(x)
    with pytest.raises(MalformedCallError):
        CallNode('pow', (z,)).evaluate(x)
    with pytest.raises(UnsupportedConstructError):
        BinaryOpNode('^', z, ConstantNode(2)).evaluate(x)


def test_kernels_dispatch_on_op_codes():
    a = np.array([1.0, 4.0, 9.0])
    b = np.array([2.0, 2.0, 3.0])
    np.testing.assert_array_equal(evaluate_binary_op(a, b, int(OpType.ADD)), [3.0, 6.0, 12.0])
    np.testing.assert_array_equal(evaluate_binary_op(a, b, int(OpType.DIV)), [0.5, 2.0, 3.0])
    np.testing.assert_allclose(evaluate_unary_function(a, int(OpType.LOG)), np.log(a))
    np.testing.assert_array_equal(evaluate_binary_function(a, b, int(OpType.POW)), [1.0, 16.0, 729.0])
    np.testing.assert_allclose(evaluate_binary_function(a, b, int(OpType.LOG)), np.log(a) / np.log(b))
    # Codes outside a kernel's family give NaN
    assert np.all(np.isnan(evaluate_binary_op(a, b, int(OpType.SIN))))
    assert np.all(np.isnan(evaluate_unary_function(a, int(OpType.POW))))


# Expression

def test_from_function_binds_variable():
    f = Expression.from_function(lambda t: fn.sin(t) * t, 't')
    assert f.variable == 't'
    assert f.root == CallNode('sin', (VariableNode('t'),)) * VariableNode('t')


def test_from_function_lifts_constant_result():
    f = Expression.from_function(lambda z: 7, 'z')
    assert f.root == ConstantNode(7)
    np.testing.assert_array_equal(f.evaluate([1.0, 2.0]), [7.0, 7.0])


def test_scalar_call_returns_float(z):
    f = Expression(fn.exp(z), 'z')
    value = f(1.0)
    assert isinstance(value, float)
    assert value == pytest.approx(math.e)
    assert f([0.0, 1.0]).shape == (2,)


def test_size_and_depth(z):
    f = Expression(fn.sin(z * z) + 1, 'z')
    assert f.size() == 6
    assert f.depth() == 4


def test_expression_equality(z):
    f = Expression(fn.sin(z), 'z')
    assert f == Expression(fn.sin(VariableNode('z')), 'z')
    assert f != Expression(fn.sin(z), 'y')
    assert hash(f) == hash(Expression(fn.sin(z), 'z'))
    assert repr(f) == "Expression(z -> sin(z))"
    assert str(f) == "sin(z)"


def test_to_sympy(z):
    f = Expression(fn.sin(z) * fn.pow(z, 2) + fn.log(z, 3) / z, 'z')
    s = sp.Symbol('z')
    expected = sp.sin(s) * s ** 2 + sp.log(s, 3) / s
    assert sp.simplify(f.to_sympy() - expected) == 0


def test_lambdify_agrees_with_evaluate(z):
    f = Expression(fn.atan(z) * fn.exp(-z) + fn.cosh(z / 3), 'z')
    x = np.linspace(-2.0, 2.0, 17)
    np.testing.assert_allclose(f.lambdify()(x), f.evaluate(x), rtol=1e-12, atol=1e-14)


def test_from_string():
    f = Expression.from_string("sin(x)^2 + log(x, 2) - 3/x")
    x = np.linspace(0.5, 4.0, 8)
    expected = np.sin(x) ** 2 + np.log2(x) - 3 / x
    np.testing.assert_allclose(f.evaluate(x), expected, rtol=1e-12, atol=1e-14)


def test_from_string_with_other_variable():
    f = Expression.from_string("exp(t) * t", variable='t')
    assert f.variable == 't'
    assert f(2.0) == pytest.approx(2 * math.exp(2))


@pytest.mark.parametrize("text", ["sin(", "x +* 2", "x + y", "sqrt(-1)", "x > 1"])
def test_from_string_rejects_bad_input(text):
    with pytest.raises(ValueError):
        Expression.from_string(text)


def test_from_sympy_round_trip_is_equivalent():
    s = sp.Symbol('x')
    expr = sp.tanh(s) / (1 + s ** 2) - sp.acos(s / 2)
    f = Expression.from_sympy(expr, 'x')
    x = np.linspace(-1.5, 1.5, 13)
    reference = sp.lambdify(s, expr, modules='numpy')(x)
    np.testing.assert_allclose(f.evaluate(x), reference, rtol=1e-12)
