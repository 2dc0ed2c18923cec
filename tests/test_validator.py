from infix_tree.expression_tree import ExpressionValidator, is_valid_expression
from infix_tree.expression_tree import ConstantNode, VariableNode, BinaryOpNode


def test_accepts_well_formed_expressions():
    for expr in ["1+2*3", "(1+2)*3", "a - b / c", "((a))", "\t(x*y)+ 9 ", "7"]:
        assert is_valid_expression(expr), expr


def test_rejects_unbalanced_parentheses():
    for expr in ["(1+2", "1+2)", ")(", "((a)", "(a))", ")"]:
        assert not is_valid_expression(expr), expr


def test_rejects_illegal_characters():
    for expr in ["1%2", "a^b", "2.5", "a=b", "x,y", "1+2;", "é+1", "²"]:
        assert not is_valid_expression(expr), expr


def test_empty_string_passes_bracket_check():
    # Emptiness is the calculator's concern, not the validator's
    assert is_valid_expression("")
    assert is_valid_expression("   ")


def test_validator_does_not_check_operator_placement():
    assert is_valid_expression("1++2")
    assert is_valid_expression("()")


def test_tree_structure_validation():
    good = BinaryOpNode('+', ConstantNode('1'), VariableNode('a'))
    assert ExpressionValidator.is_valid_tree(good)

    assert not ExpressionValidator.is_valid_tree(None)
    assert not ExpressionValidator.is_valid_tree(BinaryOpNode('%', ConstantNode('1'), ConstantNode('2')))
    assert not ExpressionValidator.is_valid_tree(BinaryOpNode('+', ConstantNode('1'), None))
    assert not ExpressionValidator.is_valid_tree(VariableNode('ab'))


def test_only_blanks_and_tabs_count_as_whitespace():
    for expr in ["1+\n2", "1+\r2", "1+\x0b2", "1+\x0c2", "1+\u30002", "a\xa0+b", "\n"]:
        assert not is_valid_expression(expr), repr(expr)
    assert is_valid_expression(" 1 +\t2\t")


def test_tree_structure_validation_on_deep_tree():
    root = VariableNode('a')
    for _ in range(5000):
        root = BinaryOpNode('-', root, ConstantNode('1'))
    assert ExpressionValidator.is_valid_tree(root)

    root.right = VariableNode('?')
    assert not ExpressionValidator.is_valid_tree(root)
