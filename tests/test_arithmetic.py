import pytest

from tools.arithmetic import ExpressionError, evaluate, is_safe_expression


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2 + 3", 5),
        ("2 + 3 * 4", 14),
        ("(2 + 3) * 4", 20),
        ("7 / 2", 3.5),
        ("-3 + 5", 2),
        ("10 / 4 * 2", 5),
        ("1.5 * 2", 3),
        ("  8 - 2 - 1 ", 5),
        ("-(2 + 1)", -3),
        (".5 + .5", 1),
    ],
)
def test_evaluate(expression, expected):
    assert evaluate(expression) == expected


def test_integral_results_are_ints():
    assert isinstance(evaluate("4 / 2"), int)


@pytest.mark.parametrize("expression", ["2 +", "(1 + 2", "1 + 2)", "2 ** 3", "1.2.3", "()", ""])
def test_malformed_expressions_raise(expression):
    with pytest.raises(ExpressionError):
        evaluate(expression)


def test_division_by_zero_raises():
    with pytest.raises(ExpressionError, match="Division by zero"):
        evaluate("1 / (2 - 2)")


@pytest.mark.parametrize(
    "expression",
    ["__import__('os')", "2 + a", "1e3", "2 % 3", "2 ^ 3", "abs(-1)", "1; 2"],
)
def test_letters_and_other_symbols_are_unsafe(expression):
    assert not is_safe_expression(expression)
    with pytest.raises(ExpressionError):
        evaluate(expression)
