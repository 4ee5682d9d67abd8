"""Postfix evaluator tests - operators, functions, variables and error kinds."""

import math

import pytest

from core import (
    DivisionByZeroError, DomainError, MalformedExpressionError, RPNEvaluator,
    StackUnderflowError, UndefinedVariableError, UnknownIdentifierError,
    to_postfix, tokenize
)


def _eval(formula, variables=None, functions=None):
    return RPNEvaluator.evaluate(to_postfix(tokenize(formula)), variables or {}, functions)


_HOST_OPS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b,
    "%": lambda a, b: a % b,
    "^": lambda a, b: a ** b,
}


@pytest.mark.parametrize("op", sorted(_HOST_OPS))
@pytest.mark.parametrize("a, b", [(7.5, 2.0), (3, 4), (10, 3), (2, 0.5), (0.1, 0.2)])
def test_binary_operator_matches_python(op, a, b, registry):
    assert _eval(f"{a} {op} {b}", functions=registry) == pytest.approx(_HOST_OPS[op](float(a), float(b)))


def test_variables_and_parentheses(registry):
    assert _eval("2 * (x + 5)", {"x": 3}, registry) == 16


def test_power_is_left_associative(registry):
    assert _eval("2 ^ 3 ^ 2", functions=registry) == 64


def test_result_is_plain_float(registry):
    result = _eval("sqrt(16)", functions=registry)
    assert result == 4
    assert type(result) is float


@pytest.mark.parametrize("formula", ["1 / 0", "5 % 0", "x / (y - y)"])
def test_division_by_zero(formula, registry):
    with pytest.raises(DivisionByZeroError):
        _eval(formula, {"x": 1, "y": 2}, registry)


@pytest.mark.parametrize("formula", ["(0 - 8) ^ 0.5", "sqrt(0 - 4)", "log(0 - 1)"])
def test_non_real_results_are_domain_errors(formula, registry):
    with pytest.raises(DomainError):
        _eval(formula, functions=registry)


def test_nan_input_is_not_a_domain_error(registry):
    assert math.isnan(_eval("x + 1", {"x": float("nan")}, registry))


def test_undefined_variable_names_the_variable(registry):
    with pytest.raises(UndefinedVariableError) as exc:
        _eval("x + y", {"x": 1}, registry)
    assert exc.value.name == "y"


def test_unknown_function_call(registry):
    with pytest.raises(UnknownIdentifierError) as exc:
        _eval("foo(1)", functions=registry)
    assert not isinstance(exc.value, UndefinedVariableError)


@pytest.mark.parametrize("formula", ["", "   ", "1 2", "f() f()"])
def test_malformed_expressions(formula, registry):
    registry.register("f", 0, lambda: 1.0)
    with pytest.raises(MalformedExpressionError):
        _eval(formula, functions=registry)


@pytest.mark.parametrize("formula", ["1 +", "- 3", "1 + * 2"])
def test_operator_underflow(formula, registry):
    with pytest.raises(StackUnderflowError) as exc:
        _eval(formula, functions=registry)
    assert exc.value.needed == 2


def test_function_underflow(registry):
    registry.register("sub2", 2, lambda a, b: a - b)
    with pytest.raises(StackUnderflowError) as exc:
        _eval("sub2(1)", functions=registry)
    assert exc.value.symbol == "sub2"


def test_wrong_argument_count(registry):
    with pytest.raises(MalformedExpressionError):
        _eval("sqrt(1, 2)", functions=registry)
    with pytest.raises(MalformedExpressionError):
        _eval("fv(0.1, 2)", functions=registry)


def test_arguments_keep_call_order(registry):
    registry.register("sub2", 2, lambda a, b: a - b)
    assert _eval("sub2(10, 3)", functions=registry) == 7
    # 无逗号时按注册的 arity 出栈
    assert _eval("sub2(10 3)", functions=registry) == 7


def test_bare_function_name_applies_by_arity(registry):
    assert _eval("16 sqrt", functions=registry) == 4


def test_variable_shadows_function_name(registry):
    assert _eval("abs + 1", {"abs": 5}, registry) == 6


def test_zero_arity_function(registry):
    registry.register("answer", 0, lambda: 42)
    assert _eval("answer() + 1", functions=registry) == 43


@pytest.mark.parametrize("formula, expected", [
    ("abs(0 - 3)", 3),
    ("round(2.5)", 3),
    ("round(0 - 2.5)", -2),
    ("floor(2.7)", 2),
    ("ceil(2.1)", 3),
    ("exp(0)", 1),
    ("log(1)", 0),
    ("sin(0) + cos(0)", 1),
    ("tan(0)", 0),
])
def test_default_functions(formula, expected, registry):
    assert _eval(formula, functions=registry) == pytest.approx(expected)


def test_pmt(registry):
    assert _eval("pmt(0, 10, 1000)", functions=registry) == -100
    expected = 0.05 * 1000 / (1 - 1.05 ** -10)
    assert _eval("pmt(rate, nper, pv)", {"rate": 0.05, "nper": 10, "pv": 1000}, registry) == pytest.approx(expected)


def test_pmt_zero_rate_zero_periods(registry):
    with pytest.raises(DivisionByZeroError):
        _eval("pmt(0, 0, 1000)", functions=registry)


def test_fv_optional_present_value(registry):
    without_pv = _eval("fv(0.05, 10, 100)", functions=registry)
    assert without_pv == _eval("fv(0.05, 10, 100, 0)", functions=registry)
    assert without_pv == pytest.approx(-(100 * (1.05 ** 10 - 1) / 0.05))
    assert _eval("fv(0, 10, 100, 1000)", functions=registry) == -2000


def test_function_exceptions_are_mapped(registry):
    def bad_domain(x):
        raise ValueError("negative input")

    def bad_divide(x):
        return x / 0

    registry.register("bad_domain", 1, bad_domain)
    registry.register("bad_divide", 1, bad_divide)
    with pytest.raises(DomainError):
        _eval("bad_domain(1)", functions=registry)
    with pytest.raises(DivisionByZeroError):
        _eval("bad_divide(1)", functions=registry)


def test_repeated_evaluation_is_stable(registry):
    variables = {"x": 3}
    assert _eval("2 * (x + 5)", variables, registry) == _eval("2 * (x + 5)", variables, registry)
    for _ in range(2):
        with pytest.raises(UndefinedVariableError):
            _eval("x + y", variables, registry)
    assert variables == {"x": 3}


def test_single_argument_call_uses_defaults(registry):
    registry.register("inc", 2, lambda x, step: x + step, defaults=(1,))
    assert _eval("inc(5)", functions=registry) == 6
    assert _eval("inc(5, 3)", functions=registry) == 8
    # 调用只消费自己括号内的参数
    with pytest.raises(MalformedExpressionError):
        _eval("2 inc(5)", functions=registry)


def test_non_numeric_variable_is_domain_error(registry):
    for value in (None, "a", object()):
        with pytest.raises(DomainError) as exc:
            _eval("x * 2", {"x": value}, registry)
        assert exc.value.symbol == "x"


def test_mismatched_function_signature(registry):
    registry.register("two_args", 1, lambda a, b: a + b)
    registry.register("no_value", 1, lambda a: None)
    with pytest.raises(MalformedExpressionError) as exc:
        _eval("two_args(1)", functions=registry)
    assert "two_args" in str(exc.value)
    with pytest.raises(DomainError):
        _eval("no_value(1)", functions=registry)
