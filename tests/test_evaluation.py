import numpy as np
import pytest
import sympy as sp

from infix_tree.errors import DivisionByZero, UndefinedVariable, InvalidOperator, MalformedPostfix
from infix_tree.expression_tree import (
    Expression, build_tree, to_postfix, evaluate_tree,
    BinaryOpNode, ConstantNode, VariableNode
)
from infix_tree.expression_tree.core.operators import truncating_div


def _eval(expression, bindings=None):
    with build_tree(to_postfix(expression)) as tree:
        return tree.evaluate(bindings or {})


def test_precedence_examples():
    assert to_postfix("1+2*3") == "123*+"
    assert _eval("1+2*3") == 7
    assert to_postfix("(1+2)*3") == "12+3*"
    assert _eval("(1+2)*3") == 9


def test_standard_arithmetic_without_parentheses():
    cases = {
        "9-4-3": 2,
        "8/2/2": 2,
        "2+3*4-5": 9,
        "9-2*3+8/4": 5,
        "1*2*3*4*5": 120,
        "7/2*2": 6,
        "5-9": -4,
    }
    for expression, expected in cases.items():
        assert _eval(expression) == expected, expression


def test_division_truncates_toward_zero():
    assert truncating_div(7, 2) == 3
    assert truncating_div(-7, 2) == -3
    assert truncating_div(7, -2) == -3
    assert truncating_div(-7, -2) == 3
    assert _eval("a/2", {'a': -7}) == -3


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        _eval("8/0")
    with pytest.raises(DivisionByZero):
        _eval("a/(b-b)", {'a': 1, 'b': 3})


def test_undefined_variable():
    with pytest.raises(UndefinedVariable) as excinfo:
        _eval("a+1", {})
    assert excinfo.value.name == 'a'
    assert _eval("a+1", {'a': 5}) == 6


def test_variables_are_case_sensitive():
    assert _eval("a-A", {'a': 3, 'A': 10}) == -7
    with pytest.raises(UndefinedVariable):
        _eval("A", {'a': 3})


def test_invalid_operator():
    with pytest.raises(InvalidOperator) as excinfo:
        build_tree("12%").evaluate({})
    assert excinfo.value.operator == '%'


def test_unclosed_paren_in_postfix_is_an_invalid_operator():
    # "(1+2" slips past conversion as "12+(" and the "(" lacks a second operand
    with pytest.raises(MalformedPostfix):
        build_tree(to_postfix("(1+2"))
    with pytest.raises(InvalidOperator):
        build_tree(to_postfix("3(1+2")).evaluate({})


def test_left_subtree_evaluated_first():
    # Both operands unbound: the left one is reported
    with pytest.raises(UndefinedVariable) as excinfo:
        _eval("x*y")
    assert excinfo.value.name == 'x'


def test_absent_tree_evaluates_to_zero():
    assert evaluate_tree(None, {}) == 0
    assert Expression(None).evaluate({'a': 1}) == 0


def test_reevaluation_is_idempotent():
    tree = build_tree(to_postfix("(a+b)*c-4/b"))
    bindings = {'a': 1, 'b': 2, 'c': 3}
    first = tree.evaluate(bindings)
    assert first == 7
    assert tree.evaluate(bindings) == first
    assert bindings == {'a': 1, 'b': 2, 'c': 3}


def test_large_values_do_not_overflow():
    assert _eval("a*a", {'a': 10 ** 12}) == 10 ** 24


def test_batch_evaluation():
    tree = build_tree(to_postfix("a*2+b"))
    result = tree.evaluate_batch({'a': [1, 2, 3], 'b': np.array([10, 20, 30])})
    assert result.dtype == np.int64
    np.testing.assert_array_equal(result, [12, 24, 36])


def test_batch_matches_scalar_evaluation():
    tree = build_tree(to_postfix("(a-b)/c*3+a"))
    a = np.array([-9, -4, 0, 5, 17])
    b = np.array([2, 7, -3, 1, 4])
    c = np.array([2, -3, 2, 4, -5])
    batch = tree.evaluate_batch({'a': a, 'b': b, 'c': c})
    expected = [tree.evaluate({'a': int(x), 'b': int(y), 'c': int(z)}) for x, y, z in zip(a, b, c)]
    np.testing.assert_array_equal(batch, expected)


def test_batch_scalar_bindings_broadcast():
    tree = build_tree("ab+")
    np.testing.assert_array_equal(tree.evaluate_batch({'a': 5, 'b': [1, 2]}), [6, 7])
    np.testing.assert_array_equal(tree.evaluate_batch({'a': 5, 'b': 1}), [6])


def test_batch_errors():
    tree = build_tree("ab/")
    with pytest.raises(DivisionByZero):
        tree.evaluate_batch({'a': [1, 2], 'b': [1, 0]})
    with pytest.raises(UndefinedVariable):
        tree.evaluate_batch({'a': [1, 2]})
    with pytest.raises(ValueError):
        tree.evaluate_batch({'a': [1, 2], 'b': [1, 2, 3]})
    with pytest.raises(InvalidOperator):
        build_tree("12%").evaluate_batch({})


def test_batch_does_not_alias_inputs():
    a = np.array([1, 2, 3], dtype=np.int64)
    result = build_tree("a").evaluate_batch({'a': a})
    result[0] = 100
    assert a[0] == 1


def test_sympy_rendering():
    tree = build_tree(to_postfix("(a+2)*b-c"))
    a, b, c = sp.symbols('a b c')
    assert sp.expand(tree.to_sympy() - ((a + 2) * b - c)) == 0
    assert tree.to_sympy().subs({a: 1, b: 4, c: 5}) == tree.evaluate({'a': 1, 'b': 4, 'c': 5})


def test_sympy_renders_division_exactly():
    assert build_tree("93/").to_sympy() == sp.Integer(3)
    assert build_tree("72/").to_sympy() == sp.Rational(7, 2)


def test_handmade_tree():
    root = BinaryOpNode('-', VariableNode('q'), BinaryOpNode('*', ConstantNode('2'), ConstantNode('5')))
    assert evaluate_tree(root, {'q': 4}) == -6


def test_long_sum_evaluates():
    assert _eval("+".join(["1"] * 600)) == 600


def test_deep_left_leaning_tree():
    expression = "a" + "+a" * 4999
    with build_tree(to_postfix(expression)) as tree:
        assert tree.evaluate({'a': 2}) == 10000
        assert tree.size() == 9999
        assert tree.to_postfix() == "a" + "a+" * 4999
        assert tree.to_string().startswith("(" * 4999 + "a + a)")
        np.testing.assert_array_equal(
            tree.evaluate_batch({'a': np.array([1, 2])}), [5000, 10000])
        with tree.copy() as clone:
            assert clone == tree
            assert clone.evaluate({'a': 1}) == 5000


def test_deeply_nested_parentheses():
    # 1-(1-(1-...)) alternates between 0 and 1; an even count of "1-" gives 1
    expression = "(1-" * 1000 + "1" + ")" * 1000
    assert _eval(expression) == 1
    assert _eval("(1-" * 999 + "1" + ")" * 999) == 0


def test_long_sum_renders_symbolically():
    with build_tree(to_postfix("+".join(["a"] * 600))) as tree:
        assert tree.to_sympy() == 600 * sp.Symbol('a')
